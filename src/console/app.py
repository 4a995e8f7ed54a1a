"""Command-line interface: play against a computer that picks random legal moves."""

import time
from random import Random
from typing import Optional

import typer
from rich.console import Console

from src.chess.game import Game
from src.chess.pieces import CHAR_TO_PIECE, PROMOTION_OPTIONS, PIECE_TO_CHAR, Color, opponent
from src.console.render import render_board
from src.core.config import Settings
from src.core.exceptions import GameError, InvalidRequestError
from src.core.logging import setup_logging
from src.core.models import GameResponse, MoveRequest, PlacementRequest, PromotionRequest
from src.core.shared_types import MoveResult, Status
from src.services.chess_service import FINISHED, ChessService

app = typer.Typer(
    name="chess-engine",
    help="Chess in the terminal, against a computer that plays random legal moves.",
    add_completion=False,
)
console = Console(highlight=False)

EXIT_COMMANDS = ("exit", "quit")
PROMOTION_CHARS = "/".join(PIECE_TO_CHAR[piece_type] for piece_type in PROMOTION_OPTIONS)


@app.command()
def play(
    color: Optional[str] = typer.Option(None, "--color", "-c", help="Your color: white or black"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the computer's moves"),
    think: Optional[float] = typer.Option(None, "--think", help="Seconds the computer waits before moving"),
    setup_board: bool = typer.Option(False, "--setup", help="Place the pieces yourself before playing"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Minimum log level"),
) -> None:
    """Play a game. Enter moves like 'e2e4', 'e4', 'exd5', 'Nf3', 'Nbd7', 'e7e8q' or 'O-O'."""
    settings = _load_settings(
        human_color=color, seed=seed, ai_think_seconds=think, log_level=log_level
    )
    service = ChessService(Game.new_game(), rng=Random(settings.seed))

    if setup_board:
        _set_up_board(service)

    _game_loop(service, settings)


@app.command()
def moves(
    played: list[str] = typer.Argument(None, help="Moves to play from the starting position first"),
) -> None:
    """List the legal moves of the side to move, optionally after playing some moves."""
    _load_settings()
    game = Game.new_game()
    for notation in played or []:
        if game.attempt_move(notation) != MoveResult.VALID:
            console.print(f"Cannot play {notation!r} in this position.")
            raise typer.Exit(code=1)

    legal_moves = game.legal_moves()
    console.print(f"{game.side_to_move().name} has {len(legal_moves)} legal moves:")
    console.print(" ".join(legal_moves))


# --- INTERACTIVE HELPERS ---
def _load_settings(**overrides: object) -> Settings:
    """Environment plus command line options, and logging configured to match."""
    try:
        settings = Settings.load(**overrides)
    except (GameError, ValueError) as exc:
        console.print(f"Invalid settings: {exc}")
        raise typer.Exit(code=1)

    setup_logging(settings.log_level, settings.log_file)
    return settings


def _game_loop(service: ChessService, settings: Settings) -> None:
    human = settings.human_color
    computer = opponent(human)
    console.print(f"--- Chess Game Started: Human ({human.name}) vs. AI ({computer.name}) ---")
    console.print("Enter moves in algebraic notation (e.g. 'e2e4'). Type 'exit' to quit.")

    response = service.snapshot()
    while True:
        console.print(render_board(response))

        if response.status in FINISHED:
            console.print(_game_over_message(response))
            return
        if response.status == Status.CHECK:
            console.print(f"{response.side_to_move.name} is in check!")

        if response.side_to_move == computer:
            console.print(f"{computer.name}'s turn (AI). Thinking...")
            time.sleep(settings.ai_think_seconds)
            response = service.play_random_move()
            console.print(f"AI played {response.last_move}")
            continue

        notation = typer.prompt(f"{human.name}'s turn. Enter your move")
        if notation.strip().lower() in EXIT_COMMANDS:
            console.print("Exiting game. Goodbye!")
            return

        try:
            response = service.submit_move(MoveRequest(notation=notation))
        except GameError as exc:
            console.print(f"Error: {exc}")
            continue

        if response.result == MoveResult.INVALID:
            console.print(f"Invalid move: {notation!r}. Try again.")
        elif response.result == MoveResult.PROMOTION_PENDING:
            response = _ask_promotion(service, response)


def _ask_promotion(service: ChessService, response: GameResponse) -> GameResponse:
    while True:
        choice = typer.prompt(f"Promote the pawn on {response.pending_promotion} to ({PROMOTION_CHARS})")
        piece_type = CHAR_TO_PIECE.get(choice.strip().lower())
        if piece_type not in PROMOTION_OPTIONS:
            console.print(f"Pick one of {PROMOTION_CHARS}.")
            continue
        try:
            return service.promote(
                PromotionRequest(square=response.pending_promotion, piece_type=piece_type)
            )
        except GameError as exc:
            console.print(f"Error: {exc}")


def _set_up_board(service: ChessService) -> None:
    service.clear_board()
    console.print(
        "Place pieces like 'Ke1' (white king on e1) or 'ke8' (black king on e8). Type 'done' when finished."
    )
    while True:
        text = typer.prompt("Place piece")
        if text.strip().lower() == "done":
            try:
                service.start_from_setup()
            except GameError as exc:
                console.print(str(exc))
                continue
            break

        try:
            request = PlacementRequest(placement=text)
        except InvalidRequestError as exc:
            console.print(str(exc))
            continue
        if not service.place_piece(request):
            console.print(f"Could not place {text.strip()!r}.")

    while True:
        side = typer.prompt("Side to move (white/black)", default="white").strip().upper()
        if side in Color.__members__:
            service.set_side_to_move(Color[side])
            return
        console.print("Answer white or black.")


def _game_over_message(response: GameResponse) -> str:
    if response.status == Status.CHECKMATE:
        winner = opponent(response.side_to_move)
        return f"Checkmate! {winner.name} wins."
    return f"Stalemate! {response.side_to_move.name} has no legal moves. It's a draw."


if __name__ == "__main__":
    app()
