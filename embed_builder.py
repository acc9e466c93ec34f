# embed_builder.py
"""
/embedbuilder slash command: shows a modal, composes the submitted text into
an embed, posts it to the channel and acknowledges the submitter privately.
"""
import logging

import discord
from discord import app_commands

from embed_composer import Actor, EmbedInputs, EmbedSpec, InvalidColorError, compose

log = logging.getLogger(__name__)

MODAL_ID = "embed_builder"

# Discord limits
MAX_TITLE = 256
MAX_DESC = 4000  # text inputs cap at 4000, below the 4096 embed limit
MAX_COLOR = 7
MAX_AUTHOR = 300
MAX_FIELDS = 1000

SUCCESS_COLOR = 0x4CAF50
ERROR_COLOR = 0xFF6B6B

INVALID_COLOR_MSG = "❌ Invalid color format! Please use a valid hex color (e.g., #FF6B6B)"
MISSING_PERMS_MSG = "You need the `Manage Messages` permission to use the Embed Builder!"


# ---------- Helpers ----------
def to_discord_embed(spec: EmbedSpec) -> discord.Embed:
    embed = discord.Embed(
        title=spec.title,
        description=spec.description or None,
        color=discord.Color(spec.color),
        timestamp=spec.timestamp,
    )
    if spec.author:
        embed.set_author(name=spec.author.name, url=spec.author.url, icon_url=spec.author.icon_url)
    for f in spec.fields:
        embed.add_field(name=f.name, value=f.value, inline=f.inline)
    embed.set_footer(text=spec.footer.text, icon_url=spec.footer.icon_url)
    return embed


def actor_from_user(user) -> Actor:
    try:
        avatar_url = user.display_avatar.url
    except AttributeError:
        avatar_url = None
    return Actor(display_name=user.display_name, avatar_url=avatar_url)


def success_embed(inputs: EmbedInputs, spec: EmbedSpec) -> discord.Embed:
    embed = discord.Embed(
        title="✅ Embed Created Successfully!",
        description="Your custom embed has been sent to the channel.",
        color=discord.Color(SUCCESS_COLOR),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(
        name="📝 Details",
        value=f"Title: {spec.title or 'None'}\nColor: {inputs.color or 'Default'}\nFields: {len(spec.fields)}",
        inline=True,
    )
    return embed


def failure_embed() -> discord.Embed:
    embed = discord.Embed(
        title="❌ Error Creating Embed",
        description="An error occurred while creating your embed. Please check your inputs and try again.",
        color=discord.Color(ERROR_COLOR),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(
        name="💡 Common Issues",
        value="• Invalid color format (use #RRGGBB)\n• Field format errors\n• URL format issues",
        inline=False,
    )
    return embed


async def _reply_private(interaction: discord.Interaction, **kwargs):
    if interaction.response.is_done():
        await interaction.followup.send(ephemeral=True, **kwargs)
    else:
        await interaction.response.send_message(ephemeral=True, **kwargs)


# ========== Submission handler ==========
async def handle_submission(interaction: discord.Interaction, inputs: EmbedInputs):
    """
    Compose the submitted inputs and deliver the result.

    Invalid color -> private validation message, nothing posted.
    Delivery fault (any reply included) -> logged, private generic error.
    """
    try:
        perms = interaction.permissions
        if perms is None or not perms.manage_messages:
            await interaction.response.send_message(MISSING_PERMS_MSG, ephemeral=True)
            return

        try:
            spec = compose(inputs, actor_from_user(interaction.user))
        except InvalidColorError as e:
            log.info("Rejected embed from %s: %s", interaction.user, e)
            await interaction.response.send_message(INVALID_COLOR_MSG, ephemeral=True)
            return

        await interaction.channel.send(embed=to_discord_embed(spec))
        await interaction.response.send_message(embed=success_embed(inputs, spec), ephemeral=True)
        log.info("Embed created by %s (%d fields)", interaction.user, len(spec.fields))
    except Exception:
        log.exception("Error creating embed for %s", interaction.user)
        try:
            await _reply_private(interaction, embed=failure_embed())
        except discord.DiscordException:
            log.exception("Could not report embed failure to %s", interaction.user)


# ========== Modal ==========
class EmbedBuilderModal(discord.ui.Modal, title="🎨 Embed Builder"):
    title_input = discord.ui.TextInput(
        label="📝 Title (Optional)",
        custom_id="embed_title",
        style=discord.TextStyle.short,
        placeholder="Enter a catchy title for your embed...",
        required=False,
        max_length=MAX_TITLE,
    )
    description_input = discord.ui.TextInput(
        label="📄 Description (Required)",
        custom_id="embed_description",
        style=discord.TextStyle.paragraph,
        placeholder="Write your main message here. Markdown like **bold** and *italic* works!",
        required=True,
        max_length=MAX_DESC,
    )
    color_input = discord.ui.TextInput(
        label="🎨 Color (Optional)",
        custom_id="embed_color",
        style=discord.TextStyle.short,
        placeholder="#FF6B6B (Red) | #4ECDC4 (Teal) | #45B7D1 (Blue)",
        required=False,
        max_length=MAX_COLOR,
    )
    author_input = discord.ui.TextInput(
        label="👤 Author (Optional)",
        custom_id="embed_author",
        style=discord.TextStyle.short,
        placeholder="Format: Name|URL|IconURL",
        required=False,
        max_length=MAX_AUTHOR,
    )
    fields_input = discord.ui.TextInput(
        label="📋 Fields (Optional)",
        custom_id="embed_fields",
        style=discord.TextStyle.paragraph,
        placeholder="One per line, Name|Value|Inline\nServer Info|A great server!|true",
        required=False,
        max_length=MAX_FIELDS,
    )

    def __init__(self):
        super().__init__(custom_id=MODAL_ID)

    def collect_inputs(self) -> EmbedInputs:
        return EmbedInputs(
            title=self.title_input.value,
            description=self.description_input.value,
            color=self.color_input.value,
            author=self.author_input.value,
            fields=self.fields_input.value,
        )

    async def on_submit(self, interaction: discord.Interaction):
        await handle_submission(interaction, self.collect_inputs())


# ========== Registration ==========
def register_commands(tree: app_commands.CommandTree):
    """Attach /embedbuilder to a command tree."""

    @tree.command(name="embedbuilder", description="Create a custom embed using an interactive form")
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_messages=True)
    async def embedbuilder(interaction: discord.Interaction):
        await interaction.response.send_modal(EmbedBuilderModal())

    return embedbuilder
