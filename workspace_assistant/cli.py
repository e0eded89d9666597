from typing import Optional
import typer
import asyncio
import logging
from typing_extensions import Annotated
from rich.console import Console
from rich.prompt import Prompt

from workspace_assistant.client.workspace_assistant import WorkspaceAssistant

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()


async def send_and_render(
    assistant: WorkspaceAssistant,
    conversation_id: str,
    workspace_id: str,
    user_id: str,
    message: str,
) -> None:
    """Send one message and print the answer or the user-facing error."""
    with console.status("[bold green]Thinking...", spinner="dots"):
        result = await assistant.send_message(
            conversation_id,
            message,
            workspace_id=workspace_id,
            user_id=user_id,
        )
        await assistant.flush()

    if result.success:
        console.print(f"[bright_blue]Proddy:[/bright_blue] {result.content}")
        if result.metadata and result.metadata.tool_calls:
            used = ", ".join(call.tool_name for call in result.metadata.tool_calls)
            console.print(f"[dim]Tools used: {used}[/dim]")
    else:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        if result.user_action:
            console.print(f"[yellow]Suggested action: {result.user_action}[/yellow]")


@app.command()
def chat(
    workspace_id: Annotated[
        str, typer.Option(help="The workspace ID for the conversation.")
    ] = "cli_workspace",
    user_id: Annotated[
        str, typer.Option(help="The user ID for the conversation.")
    ] = "cli_user",
    config: Annotated[
        str, typer.Option(help="Path to the configuration JSON file.")
    ] = "config.json",
    new: Annotated[
        bool, typer.Option(help="Start a new conversation thread.")
    ] = False,
    title: Annotated[
        Optional[str], typer.Option(help="Title for a new conversation thread.")
    ] = None,
):
    """
    Start an interactive chat session with the workspace assistant.
    Type 'exit' or 'quit' to end the session.
    """
    try:
        with console.status("[bold green]Initializing assistant...", spinner="dots"):
            assistant = WorkspaceAssistant(config_path=config)
            conversation_id = asyncio.run(
                assistant.create_conversation(
                    workspace_id, user_id, title=title, force_new=new
                )
            )
        console.print(
            f"[green]Assistant initialized (conversation {conversation_id}). Start chatting![/green]"
        )
        console.print("[dim]Type 'exit' or 'quit' to end.[/dim]")

    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(
            f"[bold red]An unexpected error occurred during initialization:[/bold red] {e}"
        )
        raise typer.Exit(code=1)

    while True:
        try:
            user_message = Prompt.ask("[bold green]You[/bold green]")

            if user_message.lower() in ["exit", "quit"]:
                console.print("[yellow]Exiting chat session.[/yellow]")
                break

            if not user_message.strip():
                continue

            asyncio.run(
                send_and_render(
                    assistant, conversation_id, workspace_id, user_id, user_message
                )
            )

        except KeyboardInterrupt:
            console.print(
                "\n[yellow]Exiting chat session (KeyboardInterrupt).[/yellow]"
            )
            break
        except Exception as loop_error:
            console.print(
                f"[bold red]An error occurred in the chat loop:[/bold red] {loop_error}"
            )


if __name__ == "__main__":
    app()
