#!/usr/bin/env python3
"""
Example entry point: connect to Twitch chat and answer a !ping! command
"""

import asyncio
import logging
import sys

from pydantic import ValidationError

from twitchplay.config import load_credentials_from_env
from twitchplay.logs import logger
from twitchplay.play import TwitchPlayClient


async def main():
    """Main function"""
    logger.log_event("app", "start")
    try:
        credentials = load_credentials_from_env()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        logger.log_event("app", "missing_credentials", level=logging.ERROR, error=missing)
        return 1

    client = TwitchPlayClient()
    try:
        client.set_user_info(credentials.token, credentials.username, credentials.channel)

        def on_ping(command: str, options: list[str], sender: str) -> None:
            target = options[0] if options else sender
            client.say(f"pong @{target}")

        client.register_command("ping", on_ping)

        # The poll timer needs the running loop, so connect from inside it
        result = client.connect()
        if not result:
            logger.log_event("app", "fatal_error", level=logging.ERROR, error=result.message)
            return 1
        result = client.authenticate()
        if not result:
            logger.log_event("app", "fatal_error", level=logging.ERROR, error=result.message)
            return 1

        await asyncio.Event().wait()
    finally:
        client.close()
        logger.log_event("app", "shutdown")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
