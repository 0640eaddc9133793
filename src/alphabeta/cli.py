"""
Command-line interface for alphabeta.

Commands:
- list-games: Show available games
- play: Play against the engine in the console
- analyze: Search a given position and show the engine's reasoning
- arena: Pit the engine against a random player
- benchmark: Time a search
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="alphabeta",
    help="Minimax with alpha-beta pruning - play and analyze board games",
    no_args_is_help=True,
)

console = Console()


def _make_game(game_name: str, size: int):
    """Create a game by name, exiting with an error if it is unknown."""
    from .games import get_game

    kwargs = {"size": size} if game_name == "tictactoe" else {}
    try:
        return get_game(game_name, **kwargs)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


def _check_depth(depth: int, minimum: int = 0) -> None:
    """Exit with an error if depth is below minimum."""
    if depth < minimum:
        qualifier = "non-negative" if minimum == 0 else f"at least {minimum}"
        console.print(f"[red]Error: depth must be {qualifier}[/]")
        raise typer.Exit(1)


def _resolve_depth(
    game_name: str,
    depth: Optional[int],
    difficulty: Optional[str],
    use_tactical: bool = True,
):
    """Return (max_depth, use_tactical) from an explicit depth or a difficulty name."""
    from .play import Difficulty, get_difficulty_config

    if depth is not None:
        _check_depth(depth)
        return depth, use_tactical

    try:
        diff = Difficulty(difficulty.lower())
    except ValueError:
        console.print("[red]Invalid difficulty. Choose: easy, medium, hard, impossible[/]")
        raise typer.Exit(1)

    config = get_difficulty_config(diff, game_name)
    console.print(f"[blue]Difficulty: {config.name} (depth {config.max_depth})[/]")
    return config.max_depth, config.use_tactical


@app.command("list-games")
def list_games_cmd() -> None:
    """List all available games."""
    from .games import list_games, get_game

    table = Table(title="Available Games")
    table.add_column("Name", style="cyan")
    table.add_column("Board", style="green")
    table.add_column("Win score", style="yellow")

    for name in list_games():
        spec = get_game(name).spec
        board_str = "x".join(str(d) for d in spec.board_shape)
        table.add_row(name, board_str, str(spec.win_score))

    console.print(table)


@app.command()
def play(
    game_name: Optional[str] = typer.Argument(None, help="Game to play (default: tictactoe)"),
    size: Optional[int] = typer.Option(None, "--size", help="Tic-Tac-Toe board size"),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Search depth"),
    difficulty: Optional[str] = typer.Option(None, "--difficulty", help="easy/medium/hard/impossible"),
    ai_first: Optional[bool] = typer.Option(None, "--ai-first/--human-first", help="Who opens"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML file"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Write engine moves as JSON lines"),
) -> None:
    """Play against the engine. You are X, the engine is O."""
    from .errors import AlphaBetaError
    from .play import EnginePlayer, HumanPlayer, play_match
    from .utils import Config, Logger, print_board, print_config

    if config_path and config_path.exists():
        config = Config.load(str(config_path))
    else:
        config = Config()

    # Command-line options win over the config file
    if game_name is not None:
        config.game.name = game_name
    if size is not None:
        config.game.board_size = size
    if ai_first is not None:
        config.play.ai_first = ai_first
    if difficulty is not None:
        config.play.difficulty = difficulty
    if log_dir is not None:
        config.log_dir = str(log_dir)

    if config_path:
        print_config(config)
    config.ensure_dirs()

    game = _make_game(config.game.name, config.game.board_size)
    if depth is None and config.play.difficulty is None:
        depth = config.search.max_depth
    max_depth, use_tactical = _resolve_depth(
        config.game.name, depth, config.play.difficulty, config.search.use_tactical
    )

    logger = Logger(config.log_dir, verbose=False)
    if logger.log_file:
        console.print(f"[blue]Logging engine moves to {logger.log_file}[/]")
    engine = EnginePlayer(max_depth, use_tactical=use_tactical)

    def prompt(legal: list) -> str:
        return typer.prompt("\nYour turn: enter your move")

    def invalid(message: str) -> None:
        console.print(f"[red]{message}[/]")

    human = HumanPlayer(prompt, on_invalid=invalid)

    def on_move(game, move, is_max: bool) -> None:
        if is_max:
            print_board(game.render_rich(), title="Board")
            return
        logger.log_search(config.game.name, engine.last_result)
        console.print(f"\nAI's turn: played ({move})")
        print_board(game.render_rich(last_move=move), title="[red]O[/] marks the most recent AI move")

    console.print(f"\n[bold]Playing {config.game.name}[/]")
    console.print("You are X, AI is O\n")
    if not config.play.ai_first:
        print_board(game.render_rich(), title="Board")

    try:
        record = play_match(
            game,
            max_player=human,
            min_player=engine,
            min_first=config.play.ai_first,
            on_move=on_move,
        )
    except AlphaBetaError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    if record.result == "max":
        console.print("\n[green]Player (X) wins![/]")
    elif record.result == "min":
        console.print("\n[red]AI (O) wins![/]")
    else:
        console.print("\n[yellow]It's a draw![/]")


@app.command()
def analyze(
    game_name: str = typer.Argument("tictactoe", help="Game to analyze"),
    moves: str = typer.Option("", "--moves", "-m", help="Moves played so far, separated by ';'"),
    depth: int = typer.Option(5, "--depth", "-d", help="Search depth"),
    size: int = typer.Option(3, "--size", help="Tic-Tac-Toe board size"),
    ai_first: bool = typer.Option(False, "--ai-first/--human-first", help="First listed move is O's"),
    no_tactical: bool = typer.Option(False, "--no-tactical", help="Skip the tactical shortcut"),
) -> None:
    """Show the engine's choice for O in a position."""
    from .errors import AlphaBetaError
    from .search import Minimax
    from .utils import print_board, print_search

    game = _make_game(game_name, size)

    is_max = not ai_first
    for text in filter(None, (m.strip() for m in moves.split(";"))):
        try:
            move = game.parse_move(text)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/]")
            raise typer.Exit(1)
        if not game.is_legal(move):
            console.print(f"[red]Error: illegal move '{text}'[/]")
            raise typer.Exit(1)
        game.execute(move, is_max)
        is_max = not is_max

    print_board(game.render_rich(), title=game_name)

    if game.is_terminal():
        console.print(f"[yellow]Game over, utility {game.utility()}[/]")
        return
    if is_max:
        console.print("[red]Error: it is X's turn; the engine only plays O[/]")
        raise typer.Exit(1)

    try:
        engine = Minimax(game, depth, use_tactical=not no_tactical)
        result = engine.analyze()
    except AlphaBetaError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    print_search(result)


@app.command()
def arena(
    game_name: str = typer.Argument("tictactoe", help="Game to play"),
    games: int = typer.Option(20, "--games", "-n", help="Number of games"),
    depth: int = typer.Option(3, "--depth", "-d", help="Engine search depth"),
    size: int = typer.Option(3, "--size", help="Tic-Tac-Toe board size"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random opponent seed (default: config seed)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML file"),
) -> None:
    """Play the engine (O) against a random opponent (X)."""
    from .errors import AlphaBetaError
    from .play import Arena
    from .utils import Config, Logger, create_progress

    if config_path and config_path.exists():
        config = Config.load(str(config_path))
    else:
        config = Config()
    if seed is None:
        seed = config.seed

    _check_depth(depth)
    _make_game(game_name, size)
    Logger().log_info(f"Engine (depth {depth}) vs random, {games} games, seed {seed}")

    arena_ = Arena(lambda: _make_game(game_name, size), max_depth=depth)

    try:
        with create_progress() as progress:
            task = progress.add_task("Arena", total=games)
            result = arena_.evaluate_vs_random(
                num_games=games,
                seed=seed,
                progress_callback=lambda done, _: progress.update(task, completed=done),
            )
    except AlphaBetaError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    table = Table(title=f"Engine (depth {depth}) vs random")
    table.add_column("Wins", style="green")
    table.add_column("Losses", style="red")
    table.add_column("Draws", style="yellow")
    table.add_column("Score", style="cyan")
    table.add_row(
        str(result.wins), str(result.losses), str(result.draws), f"{result.score:.2f}"
    )
    console.print(table)


@app.command()
def benchmark(
    game_name: str = typer.Argument("tictactoe", help="Game to benchmark"),
    depth: int = typer.Option(9, "--depth", "-d", help="Search depth"),
    size: int = typer.Option(3, "--size", help="Tic-Tac-Toe board size"),
) -> None:
    """Time a full search from the opening position."""
    from .errors import AlphaBetaError
    from .search import Minimax

    # The opening has no tactic, so depth 0 cannot produce a move
    _check_depth(depth, minimum=1)
    game = _make_game(game_name, size)
    console.print(f"[blue]Benchmarking {game_name} at depth {depth}[/]")

    try:
        result = Minimax(game, depth, use_tactical=False).analyze()
    except AlphaBetaError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)
    stats = result.stats

    console.print("\n[green]Results:[/]")
    console.print(f"  Move: ({result.move}), score {result.score}")
    console.print(f"  Nodes: {stats.nodes}")
    console.print(f"  Cutoffs: {stats.cutoffs}")
    console.print(f"  Total time: {stats.elapsed:.3f}s")
    console.print(f"  Nodes/sec: {stats.nodes_per_second:.0f}")


if __name__ == "__main__":
    app()
