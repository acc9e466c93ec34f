# main.py
import logging
import os
import sys

import discord
from discord.ext import commands

from embed_builder import register_commands
from keep_alive import keep_alive

# --- Configuration ---
BOT_TOKEN = os.environ.get("DISCORD_BOT_TOKEN")  # <--- set this in your environment
GUILD_ID = os.environ.get("GUILD_ID")            # optional: set to a guild id for immediate testing
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
# ----------------------

log = logging.getLogger(__name__)


def create_bot() -> commands.Bot:
    intents = discord.Intents.default()
    bot = commands.Bot(command_prefix="!", intents=intents)
    register_commands(bot.tree)

    @bot.event
    async def on_ready():
        log.info("✅ Logged in as %s (ID: %s)", bot.user, bot.user.id)
        try:
            if GUILD_ID:
                # Quick sync to a single guild (fast during development)
                guild_obj = discord.Object(id=int(GUILD_ID))
                bot.tree.copy_global_to(guild=guild_obj)
                synced = await bot.tree.sync(guild=guild_obj)
                log.info("🔗 Synced %d commands to guild %s", len(synced), GUILD_ID)
            else:
                # Global sync (may take up to an hour to propagate)
                synced = await bot.tree.sync()
                log.info("🔗 Synced %d global commands", len(synced))
        except (discord.HTTPException, ValueError) as e:
            log.warning("⚠️ Error syncing commands: %s", e)

    return bot


def main() -> int:
    discord.utils.setup_logging(level=getattr(logging, LOG_LEVEL, logging.INFO))

    if not BOT_TOKEN:
        log.error("DISCORD_BOT_TOKEN environment variable not set. Exiting.")
        return 1

    keep_alive()
    bot = create_bot()
    # logging is already configured above
    bot.run(BOT_TOKEN, log_handler=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
