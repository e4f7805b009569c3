"""
象棋规则引擎 CLI

- moves: 列出伪合法走法
- show: 显示棋盘
- status: 判断胜负
- play: 按 ICCS 记谱走棋
- selfplay: 随机对局
- serve: 启动 API 服务

## 使用示例

```bash
python -m xiangqi_core moves --fen "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"
python -m xiangqi_core moves --square 7,1 --json
python -m xiangqi_core play h2e2 h9g7 --show
python -m xiangqi_core selfplay --seed 42 --max-moves 200
```
"""

from __future__ import annotations

import json
import random
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xiangqi_core.ai import RandomSuggester, SuggesterConfig, play_suggested_move
from xiangqi_core.display import render_board
from xiangqi_core.errors import FormatError
from xiangqi_core.fen import INITIAL_FEN, decode, decode_side
from xiangqi_core.game import Game, GameConfig
from xiangqi_core.logging import configure_logging
from xiangqi_core.moves import all_moves, pseudo_legal_moves
from xiangqi_core.rules import terminal_winner
from xiangqi_core.types import Move, Side, Square

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Xiangqi rules engine")


def _load(fen: str):
    try:
        return decode(fen), decode_side(fen)
    except FormatError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from None


def _parse_square(text: str) -> Square:
    """解析 "row,col" 或 ICCS 坐标（如 "h2"）"""
    try:
        if "," not in text:
            return Square.from_iccs(text.strip().lower())
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        err_console.print(f"[red]Error:[/] invalid square {text!r}, expected 'row,col' or ICCS like 'h2'")
        raise typer.Exit(1) from None
    return Square(row, col)


@app.callback()
def main(
    log_dir: Path | None = typer.Option(None, "--log-dir", help="日志目录"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """Xiangqi rules engine"""
    configure_logging(log_dir, level="DEBUG" if verbose else "WARNING")


@app.command()
def moves(
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="FEN 字符串"),
    square: str | None = typer.Option(None, "--square", "-s", help="只列出该点棋子的走法 (row,col 或 ICCS)"),
    output_json: bool = typer.Option(False, "--json", help="JSON 输出"),
) -> None:
    """列出伪合法走法"""
    board, side = _load(fen)
    if square is not None:
        result = pseudo_legal_moves(board, _parse_square(square))
    else:
        result = all_moves(board, side)
    ordered = sorted(result)

    if output_json:
        response = {"side": side.value, "moves": [m.to_dict() for m in ordered], "total": len(ordered)}
        print(json.dumps(response, indent=2))
        return

    console.print(f"Moves for {side.value} ({len(ordered)}):")
    for mv in ordered:
        console.print(f"  {mv.to_iccs()}  {tuple(mv.from_sq)} -> {tuple(mv.to_sq)}")


@app.command()
def show(
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="FEN 字符串"),
    square: str | None = typer.Option(None, "--square", "-s", help="高亮该点棋子的目标点 (row,col 或 ICCS)"),
) -> None:
    """显示棋盘"""
    board, side = _load(fen)
    highlights = None
    if square is not None:
        highlights = {m.to_sq for m in pseudo_legal_moves(board, _parse_square(square))}
    console.print(render_board(board, highlights, markup=True))
    console.print(f"Side to move: {side.value}")


@app.command()
def status(
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="FEN 字符串"),
) -> None:
    """判断当前局面是否已分胜负"""
    board, side = _load(fen)
    winner = terminal_winner(board, side)
    if winner is None:
        console.print(f"Ongoing, {side.value} to move")
    else:
        console.print(f"Game over: [bold]{winner.value}[/] wins")


@app.command()
def play(
    notations: list[str] = typer.Argument(..., help="ICCS 记谱，例如 h2e2 h9g7"),
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="起始局面"),
    show_board: bool = typer.Option(False, "--show", help="结束后显示棋盘"),
) -> None:
    """依次执行一串走法并输出最终 FEN"""
    _load(fen)
    game = Game.from_fen(fen)
    for text in notations:
        try:
            move = Move.from_iccs(text)
        except FormatError as e:
            err_console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1) from None
        if not game.make_move(move):
            err_console.print(f"[red]Error:[/] illegal move {text!r} for {game.current_turn.value}")
            raise typer.Exit(1)

    for record in game.move_history:
        console.print(f"  {record.side.value:<5} {record.notation}")
    if game.is_over:
        console.print(f"Game over: [bold]{game.winner.value}[/] wins")
    console.print(f"Final FEN: {game.fen()}", soft_wrap=True)
    if show_board:
        console.print(render_board(game.board, markup=True))


@app.command()
def selfplay(
    seed: int | None = typer.Option(None, "--seed", help="随机种子"),
    max_moves: int = typer.Option(300, "--max-moves", "-n", help="最大步数"),
    fen: str = typer.Option(INITIAL_FEN, "--fen", "-f", help="起始局面"),
    show_board: bool = typer.Option(False, "--show", help="结束后显示棋盘"),
) -> None:
    """随机对随机对局"""
    _load(fen)
    game = Game.from_fen(fen, config=GameConfig(seed=seed))
    suggesters = {
        Side.RED: RandomSuggester(SuggesterConfig(name="red", seed=seed)),
        Side.BLACK: RandomSuggester(SuggesterConfig(name="black", seed=None if seed is None else seed + 1)),
    }

    rng = random.Random(game.config.seed)
    while not game.is_over and len(game.move_history) < max_moves:
        if play_suggested_move(game, suggesters[game.current_turn], rng) is None:
            break

    table = Table(title="Self-play")
    table.add_column("Game")
    table.add_column("Moves", justify="right")
    table.add_column("Captures", justify="right")
    table.add_column("Result")
    captures = sum(1 for r in game.move_history if r.captured is not None)
    table.add_row(game.game_id[:8], str(len(game.move_history)), str(captures), game.result.value)
    console.print(table)
    console.print(f"Final FEN: {game.fen()}", soft_wrap=True)
    if show_board:
        console.print(render_board(game.board, markup=True))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="监听地址"),
    port: int = typer.Option(8000, "--port", "-p", help="端口"),
) -> None:
    """启动 API 服务"""
    import uvicorn

    from xiangqi_core.api import create_app

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
