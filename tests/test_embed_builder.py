"""
Tests for the /embedbuilder interaction: modal layout, delivery and the
three user-visible outcomes (rejected, delivered, delivery failure).
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord.ext import commands

import embed_builder
from embed_builder import (
    INVALID_COLOR_MSG,
    MISSING_PERMS_MSG,
    EmbedBuilderModal,
    handle_submission,
    register_commands,
    to_discord_embed,
)
from embed_composer import ZERO_WIDTH_SPACE, Actor, EmbedInputs, compose


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _interaction(manage_messages=True):
    interaction = MagicMock()
    interaction.user.display_name = "Bot"
    interaction.user.display_avatar.url = "http://a"
    interaction.permissions.manage_messages = manage_messages
    interaction.channel.send = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup.send = AsyncMock()
    return interaction


def _sent_embed(mock):
    return mock.await_args.kwargs["embed"]


# ---------------------------------------------------------------------------
# to_discord_embed
# ---------------------------------------------------------------------------


def test_to_discord_embed_copies_everything():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    spec = compose(
        EmbedInputs(
            title="Hi",
            description="World",
            color="#FF6B6B",
            author="Jane|https://x.example|https://icon.example",
            fields="A|B|true\nC||false",
        ),
        Actor(display_name="Bot", avatar_url="http://a"),
        now=now,
    )
    embed = to_discord_embed(spec)

    assert embed.title == "Hi"
    assert embed.description == "World"
    assert embed.color.value == 0xFF6B6B
    assert embed.timestamp == now
    assert embed.author.name == "Jane"
    assert embed.author.url == "https://x.example"
    assert embed.author.icon_url == "https://icon.example"
    assert [(f.name, f.value, f.inline) for f in embed.fields] == [("A", "B", True), ("C", ZERO_WIDTH_SPACE, False)]
    assert embed.footer.text == "Created by Bot"
    assert embed.footer.icon_url == "http://a"


def test_to_discord_embed_without_optional_parts():
    spec = compose(EmbedInputs(description="only"), Actor(display_name="Bot"))
    embed = to_discord_embed(spec)

    assert embed.title is None
    assert embed.author.name is None
    assert len(embed.fields) == 0
    assert embed.color.value == 0x5865F2


# ---------------------------------------------------------------------------
# handle_submission
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_valid_submission_is_posted_and_acknowledged():
    interaction = _interaction()
    inputs = EmbedInputs(title="Hi", description="World", color="#5865F2", fields="a|b\nc|d")

    await handle_submission(interaction, inputs)

    interaction.channel.send.assert_awaited_once()
    posted = _sent_embed(interaction.channel.send)
    assert posted.title == "Hi"
    assert posted.footer.text == "Created by Bot"

    interaction.response.send_message.assert_awaited_once()
    assert interaction.response.send_message.await_args.kwargs["ephemeral"] is True
    ack = _sent_embed(interaction.response.send_message)
    assert ack.color.value == embed_builder.SUCCESS_COLOR
    assert ack.fields[0].value == "Title: Hi\nColor: #5865F2\nFields: 2"


@pytest.mark.asyncio
async def test_acknowledgement_defaults():
    interaction = _interaction()

    await handle_submission(interaction, EmbedInputs(description="World"))

    ack = _sent_embed(interaction.response.send_message)
    assert ack.fields[0].value == "Title: None\nColor: Default\nFields: 0"


@pytest.mark.asyncio
async def test_invalid_color_posts_nothing():
    interaction = _interaction()

    await handle_submission(interaction, EmbedInputs(description="World", color="red"))

    interaction.channel.send.assert_not_awaited()
    interaction.response.send_message.assert_awaited_once_with(INVALID_COLOR_MSG, ephemeral=True)


@pytest.mark.asyncio
async def test_missing_permission_is_refused():
    interaction = _interaction(manage_messages=False)

    await handle_submission(interaction, EmbedInputs(description="World"))

    interaction.channel.send.assert_not_awaited()
    interaction.response.send_message.assert_awaited_once_with(MISSING_PERMS_MSG, ephemeral=True)


@pytest.mark.asyncio
async def test_delivery_failure_reports_generic_error():
    interaction = _interaction()
    interaction.channel.send.side_effect = RuntimeError("channel gone")

    await handle_submission(interaction, EmbedInputs(description="World"))

    interaction.response.send_message.assert_awaited_once()
    assert interaction.response.send_message.await_args.kwargs["ephemeral"] is True
    err = _sent_embed(interaction.response.send_message)
    assert err.color.value == embed_builder.ERROR_COLOR
    assert err.title == "❌ Error Creating Embed"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "manage_messages, inputs",
    [
        (False, EmbedInputs(description="World")),
        (True, EmbedInputs(description="World", color="red")),
    ],
)
async def test_failed_rejection_reply_reports_generic_error(manage_messages, inputs):
    interaction = _interaction(manage_messages=manage_messages)
    interaction.response.send_message.side_effect = [RuntimeError("reply failed"), None]

    await handle_submission(interaction, inputs)

    interaction.channel.send.assert_not_awaited()
    assert interaction.response.send_message.await_count == 2
    assert interaction.response.send_message.await_args.kwargs["ephemeral"] is True
    assert _sent_embed(interaction.response.send_message).color.value == embed_builder.ERROR_COLOR


@pytest.mark.asyncio
async def test_failure_after_response_uses_followup():
    interaction = _interaction()
    interaction.response.send_message.side_effect = [RuntimeError("ack failed")]
    interaction.response.is_done.return_value = True

    await handle_submission(interaction, EmbedInputs(description="World"))

    interaction.channel.send.assert_awaited_once()
    interaction.followup.send.assert_awaited_once()
    assert interaction.followup.send.await_args.kwargs["ephemeral"] is True
    assert _sent_embed(interaction.followup.send).color.value == embed_builder.ERROR_COLOR


# ---------------------------------------------------------------------------
# Modal and registration
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_modal_layout():
    modal = EmbedBuilderModal()

    assert modal.custom_id == "embed_builder"
    assert [item.custom_id for item in modal.children] == [
        "embed_title",
        "embed_description",
        "embed_color",
        "embed_author",
        "embed_fields",
    ]
    assert modal.description_input.required is True
    assert modal.color_input.max_length == 7


@pytest.mark.asyncio
async def test_modal_submit_forwards_inputs(monkeypatch):
    modal = EmbedBuilderModal()
    inputs = EmbedInputs(description="World", color="#FFFFFF")
    monkeypatch.setattr(modal, "collect_inputs", lambda: inputs)
    handler = AsyncMock()
    monkeypatch.setattr(embed_builder, "handle_submission", handler)
    interaction = _interaction()

    await modal.on_submit(interaction)

    handler.assert_awaited_once_with(interaction, inputs)


def test_register_commands_adds_embedbuilder():
    bot = commands.Bot(command_prefix="!", intents=discord.Intents.default())

    register_commands(bot.tree)

    command = bot.tree.get_command("embedbuilder")
    assert command is not None
    assert command.default_permissions.manage_messages is True
    assert command.guild_only is True
