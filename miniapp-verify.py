#!/usr/bin/env python

import argparse
import configparser
import sys

from aiohttp import web
from telegram.ext import Application, CommandHandler

from miniapp_verify.config import load_config
from miniapp_verify.handlers import (
    help_command, post_init, post_shutdown, start_command, webapp_command,
)
from miniapp_verify.web_api import create_web_app


def run_api_only(config) -> None:
    """Serve only the HTTP API, without the Telegram bot."""
    port = config.api_port or 8080
    print(f"HTTP API starting on {config.api_host}:{port}")
    web.run_app(create_web_app(config), host=config.api_host, port=port, print=None)


def main():
    parser = argparse.ArgumentParser(description="Telegram Mini App initData verifier")
    parser.add_argument("-c", "--config", type=str, default="config.ini", help="Path to config file")
    parser.add_argument("--api-only", action="store_true", help="Run the HTTP API without the bot")
    args = parser.parse_args()

    config_file = configparser.ConfigParser()
    if not config_file.read(args.config):
        print(f"Config file not found: {args.config}")
        sys.exit(1)
    config = load_config(config_file)

    if not config.bot_token:
        print("[Config] bot_token is not set; /api/validate will answer SERVER_CONFIG_ERROR")

    if args.api_only:
        run_api_only(config)
        return

    if not config.bot_token:
        print("Cannot start the bot without a bot_token (use --api-only)")
        sys.exit(1)

    app = (
        Application.builder().token(config.bot_token)
        .post_init(post_init).post_shutdown(post_shutdown).build()
    )
    app.bot_data["config"] = config

    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("webapp", webapp_command))

    print("Bot started...")
    app.run_polling()


if __name__ == "__main__":
    main()
