import os
from dotenv import load_dotenv

load_dotenv()

server_host = os.getenv("SERVER_HOST", "0.0.0.0")
server_port = int(os.getenv("SERVER_PORT", "8080"))
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
lobby_sweep_interval = int(os.getenv("LOBBY_SWEEP_INTERVAL", "60"))
send_timeout = float(os.getenv("SEND_TIMEOUT", "5"))

if __name__ == "__main__":
    print(server_host, server_port, log_level, lobby_sweep_interval, send_timeout)
