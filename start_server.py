#!/usr/bin/env python3
"""
Launch the Taskboard API under uvicorn.

Settings come from the environment or a .env file: HOST, PORT, RELOAD and
LOG_LEVEL for the server, DATABASE_URL for the banner.
"""

import os

import uvicorn
from dotenv import load_dotenv


def server_settings() -> dict:
    """Keyword arguments for ``uvicorn.run``"""
    load_dotenv()
    return {
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT", "8000")),
        "reload": os.getenv("RELOAD", "true").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "info").lower(),
    }


def main():
    settings = server_settings()
    backend = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db").split("://")[0]

    print(f"🚀 Taskboard API on http://{settings['host']}:{settings['port']}")
    print(f"   database: {backend} | reload: {settings['reload']} | log level: {settings['log_level']}")

    uvicorn.run("main:app", **settings)


if __name__ == "__main__":
    main()
