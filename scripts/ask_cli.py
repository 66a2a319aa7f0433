#!/usr/bin/env python3
"""Interactive terminal client for the DingTalk developer assistant."""

import asyncio
import sys

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from dingtalk_assistant.clients.dingtalk import DingTalkClient, DingTalkConfig, DingTalkError
from dingtalk_assistant.models.conversation import AnswerResult
from dingtalk_assistant.models.session import Session


class AskCLI:
    """Ask questions and follow up from the terminal."""

    def __init__(self, config: DingTalkConfig):
        """Initialize ask CLI."""
        self.client = DingTalkClient(config)
        self.session = Session(session_id="cli")
        self.console = Console()

    async def start(self) -> None:
        """Start the interactive session."""
        self.console.print(
            Panel.fit(
                "[bold blue]DingTalk Developer Assistant[/bold blue]\n"
                "Questions start a new conversation; prefix with /f to follow up.\n"
                "Commands: /f <question>, /history, /recommend <page url>, /new, /help, /quit",
                border_style="blue",
            )
        )

        try:
            while True:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]").strip()

                if user_input.lower() in ["/quit", "/exit", "quit", "exit"]:
                    break
                elif user_input.lower() == "/help":
                    self._show_help()
                elif user_input.lower() == "/new":
                    self.session.conversation_id = None
                    self.console.print("[yellow]Conversation cleared[/yellow]")
                elif user_input.lower() == "/history":
                    await self._show_history()
                elif user_input.startswith("/recommend"):
                    await self._show_recommendations(user_input.removeprefix("/recommend").strip())
                elif user_input.startswith("/f "):
                    await self._follow_up(user_input.removeprefix("/f ").strip())
                elif user_input:
                    await self._ask(user_input)

        except (KeyboardInterrupt, EOFError):
            pass
        finally:
            self.console.print("\n[yellow]Goodbye![/yellow]")
            await self.client.aclose()

    async def _ask(self, question: str) -> None:
        try:
            with self.console.status("Thinking..."):
                result = await self.client.query(question)
        except DingTalkError as e:
            self.console.print(f"[red]Error: {e}[/red]")
            return

        self.session.set_conversation(result.conversation_id)
        self._display_answer(result)

    async def _follow_up(self, question: str) -> None:
        if not self.session.conversation_id:
            self.console.print("[yellow]No active conversation. Ask a question first.[/yellow]")
            return

        try:
            with self.console.status("Thinking..."):
                result = await self.client.follow_up(self.session.conversation_id, question)
        except DingTalkError as e:
            self.console.print(f"[red]Error: {e}[/red]")
            return

        self._display_answer(result)

    async def _show_history(self) -> None:
        if not self.session.conversation_id:
            self.console.print("[yellow]No active conversation.[/yellow]")
            return

        try:
            history = await self.client.get_history(self.session.conversation_id)
        except DingTalkError as e:
            self.console.print(f"[red]Error: {e}[/red]")
            return

        for entry in history.dialog:
            self.console.print(f"[bold cyan]Q ({entry.create_time}):[/bold cyan] {entry.question}")
            self.console.print(Markdown(entry.answer.answer))

    async def _show_recommendations(self, page_url: str) -> None:
        if not page_url:
            self.console.print("[yellow]Usage: /recommend <documentation page url>[/yellow]")
            return

        questions = await self.client.get_recommended_questions(page_url)
        if not questions:
            self.console.print("[dim]No recommendations for this page.[/dim]")
            return

        self.console.print("\n".join(f"• {question}" for question in questions))

    def _display_answer(self, result: AnswerResult) -> None:
        self.console.print(
            Panel(
                Markdown(result.answer),
                title=f"[bold green]Assistant[/bold green] [dim]{result.conversation_id}[/dim]",
                border_style="green",
                padding=(1, 2),
            )
        )

        if result.follow_up_questions:
            follow_ups = "\n".join(
                f"{index}. {question}" for index, question in enumerate(result.follow_up_questions, start=1)
            )
            self.console.print(Panel(follow_ups, title="[cyan]Suggested follow-ups[/cyan]", border_style="cyan"))

    def _show_help(self) -> None:
        help_text = """
[bold]Available Commands:[/bold]
• <question> - Start a new conversation
• /f <question> - Follow up in the current conversation
• /history - Show the current conversation
• /recommend <page url> - Recommended questions for a documentation page
• /new - Forget the current conversation
• /quit or /exit - Exit

[bold]Examples:[/bold]
1. 如何创建钉钉机器人？
2. /f 机器人如何发送卡片消息？
3. /recommend https://open.dingtalk.com/document/dingstart/start-overview
        """

        self.console.print(Panel(help_text.strip(), title="[cyan]Help[/cyan]", border_style="cyan"))


def main():
    """Main entry point for the ask CLI."""
    plugin_config = {}
    if len(sys.argv) > 1:
        plugin_config["baseUrl"] = sys.argv[1]
    if len(sys.argv) > 2:
        plugin_config["sseBaseUrl"] = sys.argv[2]

    cli = AskCLI(DingTalkConfig.from_plugin_config(plugin_config))
    asyncio.run(cli.start())


if __name__ == "__main__":
    main()
