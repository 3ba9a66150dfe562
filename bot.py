"""
bot.py — cordova-bridge
Entry point. Discord client, message routing, response dispatch.
"""

import sys

import discord

import config
import parser as msg_parser
from parser import WorkspacePrompt, Command, FallbackPrompt
from workspaces import WorkspaceRegistry
from cordova_project import CordovaProject
from cordova_runner import CordovaError, CordovaRunner
from commands import components, lifecycle
from commands.create import create_cordova_project, open_cordova_project

# ── Startup ──────────────────────────────────────────────────────────────────

problems = config.validate()
if problems:
    for p in problems:
        print(f"  ❌ {p}")
    sys.exit(1)

print("🤖 cordova-bridge")
config.print_config_summary()

registry = WorkspaceRegistry()

intents = discord.Intents.default()
intents.message_content = True
client = discord.Client(intents=intents)

PROJECT_COMMANDS = {
    "prepare", "compile", "build", "run", "emulate", "serve", "info",
    "plugins", "plugin", "platforms", "platform", "update", "outdated",
}


# ── Helpers ──────────────────────────────────────────────────────────────────

async def send(channel, text):
    if len(text) > config.MAX_DISCORD_MSG_LEN:
        text = text[:config.MAX_DISCORD_MSG_LEN] + "\n…(truncated)"
    await channel.send(content=text)


class WorkspaceFooterView(discord.ui.View):
    """Footer with current workspace + Switch button."""

    def __init__(self, owner_id: int):
        super().__init__(timeout=120)
        self.owner_id = owner_id

    @discord.ui.button(label="Switch workspace", style=discord.ButtonStyle.secondary)
    async def switch(self, interaction: discord.Interaction, button: discord.ui.Button):
        if interaction.user.id != self.owner_id:
            return await interaction.response.send_message("Not your command.", ephemeral=True)
        keys = registry.list_keys()
        if not keys:
            return await interaction.response.edit_message(
                content="No workspaces.", view=None)
        view = WorkspaceSelectorView(self.owner_id, keys)
        await interaction.response.edit_message(
            content="Pick a workspace:", view=view)


class WorkspaceSelectorView(discord.ui.View):
    """Shows workspace buttons for switching."""

    def __init__(self, owner_id: int, keys: list[str]):
        super().__init__(timeout=60)
        self.owner_id = owner_id
        current = registry.get_default(owner_id)
        for key in keys[:20]:  # Discord max ~25 buttons
            style = discord.ButtonStyle.primary if key == current else discord.ButtonStyle.secondary
            self.add_item(WorkspaceButton(key, style, owner_id))


class WorkspaceButton(discord.ui.Button):
    """Individual workspace button."""

    def __init__(self, ws_key: str, style: discord.ButtonStyle, owner_id: int):
        super().__init__(label=ws_key, style=style)
        self.ws_key = ws_key
        self.owner_id = owner_id

    async def callback(self, interaction: discord.Interaction):
        if interaction.user.id != self.owner_id:
            return await interaction.response.send_message("Not your command.", ephemeral=True)
        registry.set_default(self.owner_id, self.ws_key)
        await interaction.response.edit_message(
            content=f"Switched to **{self.ws_key}**.", view=None)


async def send_workspace_footer(channel, user_id: int):
    """Send workspace footer with Switch button."""
    keys = registry.list_keys()
    if not keys:
        return
    ws = registry.get_default(user_id)
    view = WorkspaceFooterView(user_id)
    if ws:
        await channel.send(f"📂 workspace: **{ws}**", view=view)
    else:
        await channel.send("📂 No workspace set — pick one:", view=view)


def help_text():
    return (
        "**cordova-bridge** — drive the Cordova CLI from chat\n\n"
        "**Projects:**\n"
        "`/create <Name> [id] [title]` — scaffold a new app\n"
        "`/open <path> [key]` — register an existing app\n"
        "`/use <ws>` · `/ls` · `/where` · `/rename <old> <new>`\n"
        "`@<ws> /build android` — run a command in another workspace\n\n"
        "**Build & run:**\n"
        "`/prepare` · `/compile` · `/build` · `/run` · `/emulate` `[platform] [args...]`\n"
        "`/serve` · `/serve stop` — local dev server\n"
        "`/info` — config.xml + plugins\n\n"
        "**Plugins:**\n"
        "`/plugins` — list\n"
        "`/plugin add <spec> [--searchpath DIR] [--noregistry] [--link] [--save] [--shrinkwrap] [--browserify]`\n"
        "`/plugin rm <id> [--save]`\n\n"
        "**Platforms:**\n"
        "`/platforms` — list installed\n"
        "`/platform add <spec> [--usegit] [--save] [--link]`\n"
        "`/platform rm <name> [--save]`\n"
        "`/update [platform] [--usegit] [--save]` · `/outdated`"
    )


async def run_project_command(channel, cmd: Command, ws_key: str, ws_path: str):
    try:
        # serve runs until stopped, so it never gets the configured timeout
        runner = CordovaRunner(timeout=0) if cmd.name == "serve" else None
        project = await CordovaProject.open(ws_path, runner=runner)
    except CordovaError as e:
        return await send(channel, f"❌ Workspace **{ws_key}**: {e}")

    match cmd.name:
        case "prepare" | "compile" | "build" | "run" | "emulate":
            label = f" [{cmd.platform}]" if cmd.platform else ""
            await send(channel, f"🔨 `cordova {cmd.name}` in **{ws_key}**{label}...")
            await send(channel, await lifecycle.handle_platform_command(
                project, cmd.name, cmd.platform, cmd.args))
        case "serve":
            if cmd.sub == "stop":
                await send(channel, await lifecycle.handle_serve_stop(ws_key))
            else:
                await send(channel, await lifecycle.handle_serve_start(ws_key, project))
        case "info":
            await send(channel, await lifecycle.handle_info(project))
        case "plugins":
            await send(channel, await components.handle_plugins(project))
        case "plugin":
            await send(channel, await components.handle_plugin(project, cmd.sub, cmd.arg, cmd.args))
        case "platforms":
            await send(channel, await components.handle_platforms(project))
        case "platform":
            await send(channel, await components.handle_platform(project, cmd.sub, cmd.arg, cmd.args))
        case "update":
            await send(channel, await components.handle_update(project, cmd.platform, cmd.args))
        case "outdated":
            await send(channel, await components.handle_outdated(project))


# ── Events ───────────────────────────────────────────────────────────────────

@client.event
async def on_ready():
    print(f"✅ Logged in as {client.user}")


@client.event
async def on_message(message: discord.Message):
    if message.author.bot:
        return

    text = message.content.strip()
    if not text:
        return

    channel = message.channel
    is_dm = isinstance(channel, discord.DMChannel)
    is_owner = message.author.id == config.DISCORD_ALLOWED_USER_ID
    if not is_dm or not is_owner:
        return

    parsed = msg_parser.parse(text)
    ws_override = None

    # @ws /command → run the command against that workspace
    if isinstance(parsed, WorkspacePrompt):
        ws_override = parsed.workspace
        parsed = msg_parser.parse(parsed.prompt)

    if isinstance(parsed, (WorkspacePrompt, FallbackPrompt)):
        return await send(channel, "❓ I only understand commands. `/help`")

    cmd = parsed

    if cmd.name in PROJECT_COMMANDS:
        ws_key, ws_path = registry.resolve(ws_override, message.author.id)
        if not ws_key:
            await send(channel, "❌ No workspace set. Use `/use <ws>` or `@ws`.")
        elif not ws_path:
            await send(channel, f"❌ Workspace `{ws_key}` not found.")
        else:
            await run_project_command(channel, cmd, ws_key, ws_path)
        return await send_workspace_footer(channel, message.author.id)

    match cmd.name:
        case "help":
            await send(channel, help_text())

        case "ls":
            keys = registry.list_keys()
            if keys:
                view = WorkspaceSelectorView(message.author.id, keys)
                await channel.send("**Workspaces:**", view=view)
            else:
                await send(channel, "No workspaces. `/create <Name>` or `/open <path>`")

        case "use":
            if not cmd.workspace:
                await send(channel, "Usage: `/use <workspace>`")
            elif registry.set_default(message.author.id, cmd.workspace):
                await send(channel, f"✅ Default → **{cmd.workspace}**")
            else:
                await send(channel, f"❌ Unknown: `{cmd.workspace}`")

        case "where":
            ws = registry.get_default(message.author.id)
            if ws:
                await send(channel, f"📂 **{ws}** → `{registry.get_path(ws)}`")
            else:
                await send(channel, "No default set.")

        case "create":
            await send(channel, "🏗️ Running `cordova create`...")
            result = await create_cordova_project(cmd.args, registry)
            if result.success:
                registry.set_default(message.author.id, result.slug)
            await send(channel, result.message)

        case "open":
            result = await open_cordova_project(cmd.arg, cmd.workspace, registry)
            if result.success:
                registry.set_default(message.author.id, result.slug)
            await send(channel, result.message)

        case "rename":
            if not cmd.workspace or not cmd.arg:
                await send(channel, "Usage: `/rename <old-name> <new-name>`")
            elif registry.rename(cmd.workspace, cmd.arg):
                await send(channel, f"Renamed **{cmd.workspace}** → **{cmd.arg}**")
            else:
                await send(channel, f"❌ Could not rename `{cmd.workspace}`.")

        case "unknown":
            await send(channel, "❓ Unknown command. `/help`")

    await send_workspace_footer(channel, message.author.id)


# ── Run ──────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    client.run(config.DISCORD_BOT_TOKEN)
