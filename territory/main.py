from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
import uvicorn

from territory.load_config import lobby_sweep_interval, log_level, server_host, server_port
from territory.routers import match
from territory.routers import restapi
from territory.routers.match import connect_manager

logging.basicConfig(level=log_level)


@asynccontextmanager
async def lifespan(app):
    """Start the lobby housekeeping job.
    This function is called to start the server.
    """
    scheduler = AsyncIOScheduler()
    # Drop waiting participants whose connection died without a close frame
    scheduler.add_job(
        connect_manager.sweep,
        "interval",
        seconds=lobby_sweep_interval,
    )
    scheduler.start()
    logging.info("Start Server")
    try:
        yield
    finally:
        scheduler.shutdown()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(match.match_router)
app.include_router(restapi.rest_router)


def run():
    uvicorn.run(app, host=server_host, port=server_port, log_level=log_level.lower())


if __name__ == "__main__":
    run()
