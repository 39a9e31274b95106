#!/usr/bin/env python3
"""Run the todo-service web server."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv
load_dotenv()


def main():
    import uvicorn

    from todo_service.config import configure_logging, get_settings

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    print(f"""
    todo-service
      URL:        http://{settings.SERVER_HOST}:{settings.SERVER_PORT}
      API Docs:   http://{settings.SERVER_HOST}:{settings.SERVER_PORT}/docs
      Database:   {settings.safe_database_url}
      Hot Reload: {settings.SERVER_RELOAD}
    """)

    uvicorn.run(
        "server.app:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.SERVER_RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
