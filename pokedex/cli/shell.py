"""Interactive Shell — menu loop over the four catalog use-cases.

Invariants:
    - The shell only builds service Requests from prompt input and prints Responses
    - Each use-case error prints one fixed message; the loop always returns to the menu
    - Prompt failure (EOF, Ctrl-C) inside an action prints a notice and returns to the menu;
      at the menu itself it ends the shell

Design Decisions:
    - rich Prompt/IntPrompt over input(): typed re-prompting and styled output
    - Blocking prompts inside the async loop: the shell is the only caller on
      its event loop, and the repository must live on one loop
"""

from rich.console import Console
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from pokedex.core.domain_types import PokemonType
from pokedex.core.errors import (
    BadRequestError, ConflictError, NotFoundError, UnknownError,
)
from pokedex.core.repository_protocols import PokemonRepository
from pokedex.services import (
    create_pokemon, delete_pokemon, fetch_all_pokemons, fetch_pokemon,
)
from pokedex.services.responses import PokemonResponse

MENU = [
    "Fetch all Pokemons",
    "Fetch a Pokemon",
    "Create a Pokemon",
    "Delete a Pokemon",
    "Exit",
]

ERROR_MESSAGES = {
    BadRequestError: "The request is invalid",
    ConflictError: "The Pokemon already exists",
    NotFoundError: "The Pokemon does not exist",
    UnknownError: "An unknown error occurred",
}

PROMPT_ERROR = "An error occurred during the prompt"


class PromptError(Exception):
    """The user aborted or stdin closed while prompting."""


def prompt_number(console: Console) -> int:
    try:
        return IntPrompt.ask("Pokemon number", console=console)
    except (EOFError, KeyboardInterrupt) as e:
        raise PromptError() from e


def prompt_name(console: Console) -> str:
    try:
        return Prompt.ask("Pokemon name", console=console)
    except (EOFError, KeyboardInterrupt) as e:
        raise PromptError() from e


def prompt_types(console: Console) -> list[str]:
    allowed = ", ".join(t.value for t in PokemonType)
    try:
        raw = Prompt.ask(f"Pokemon types (comma-separated: {allowed})", console=console)
    except (EOFError, KeyboardInterrupt) as e:
        raise PromptError() from e
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _print_pokemon(console: Console, res: PokemonResponse) -> None:
    console.print(f"#{res.number} [bold]{res.name}[/bold] ({', '.join(res.types)})")


async def fetch_all(repo: PokemonRepository, console: Console) -> None:
    pokemons = await fetch_all_pokemons.execute(repo)
    table = Table(title="Pokedex")
    table.add_column("Number", style="bright_green", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Types", style="dim")
    for p in pokemons:
        table.add_row(str(p.number), p.name, ", ".join(p.types))
    console.print(table)


async def fetch_one(repo: PokemonRepository, console: Console) -> None:
    number = prompt_number(console)
    res = await fetch_pokemon.execute(repo, fetch_pokemon.Request(number=number))
    _print_pokemon(console, res)


async def create(repo: PokemonRepository, console: Console) -> None:
    number = prompt_number(console)
    name = prompt_name(console)
    types = prompt_types(console)
    res = await create_pokemon.execute(
        repo, create_pokemon.Request(number=number, name=name, types=types),
    )
    _print_pokemon(console, res)


async def delete(repo: PokemonRepository, console: Console) -> None:
    number = prompt_number(console)
    await delete_pokemon.execute(repo, delete_pokemon.Request(number=number))
    console.print(f"Pokemon #{number} deleted")


ACTIONS = [fetch_all, fetch_one, create, delete]


async def run_action(action, repo: PokemonRepository, console: Console) -> None:
    """Run one menu action, printing the fixed message for each failure."""
    try:
        await action(repo, console)
    except PromptError:
        console.print(f"[yellow]{PROMPT_ERROR}[/yellow]")
    except (BadRequestError, ConflictError, NotFoundError, UnknownError) as e:
        console.print(f"[red]{ERROR_MESSAGES[type(e)]}[/red]")


async def run_shell(repo: PokemonRepository, console: Console | None = None) -> None:
    console = console or Console()
    choices = [str(i) for i in range(1, len(MENU) + 1)]
    while True:
        for i, label in enumerate(MENU, start=1):
            console.print(f"[bold]{i}[/bold]. {label}")
        try:
            index = IntPrompt.ask(
                "Make your choice", console=console, choices=choices, default=1,
            )
        except (EOFError, KeyboardInterrupt):
            return
        if index == len(MENU):
            return
        await run_action(ACTIONS[index - 1], repo, console)
