from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update, WebAppInfo
from telegram.ext import ContextTypes

from .config import Config


HELP_TEXT = """Mini App Verify Bot

Open the Mini App and tap "Validate" to check your initData on the server.

Commands:
/webapp - Open the Mini App
/help - Show this message"""


def build_webapp_keyboard(webapp_url: str) -> InlineKeyboardMarkup:
    """Single-button keyboard that opens the Mini App."""
    button = InlineKeyboardButton("Open Mini App", web_app=WebAppInfo(url=webapp_url))
    return InlineKeyboardMarkup([[button]])


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command."""
    await update.message.reply_text(HELP_TEXT)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command."""
    await update.message.reply_text(HELP_TEXT)


async def webapp_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /webapp command — send a button that opens the Mini App."""
    config: Config = context.bot_data["config"]
    if not config.webapp_url:
        await update.message.reply_text("Mini App is not configured.")
        return

    keyboard = build_webapp_keyboard(config.webapp_url)
    await update.message.reply_text("Tap to open the Mini App:", reply_markup=keyboard)


async def start_api(config: Config):
    """Start the HTTP API on config.api_port and return its runner."""
    from aiohttp import web as aio_web
    from .web_api import create_web_app

    runner = aio_web.AppRunner(create_web_app(config))
    await runner.setup()
    site = aio_web.TCPSite(runner, config.api_host, config.api_port)
    await site.start()
    print(f"HTTP API started on port {config.api_port}")
    return runner


async def post_init(app) -> None:
    """Send startup notification and start HTTP API if configured."""
    config: Config = app.bot_data["config"]
    if config.notify_chat_id:
        try:
            await app.bot.send_message(config.notify_chat_id, "Mini App Verify Bot is online!")
        except Exception as e:
            print(f"Startup notification failed: {e}")

    if config.api_port > 0:
        app.bot_data["_api_runner"] = await start_api(config)


async def post_shutdown(app) -> None:
    """Clean up the HTTP API server."""
    runner = app.bot_data.get("_api_runner")
    if runner:
        await runner.cleanup()
