"""
cli.py - Command-line interface for connect4net

This module provides the commands for playing locally against the advisor,
serving and joining network games, analysing board positions and
benchmarking the engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4net.debug import debug, DebugLevel
from connect4net.utils import (WIDTH, HEIGHT, DEFAULT_HOST, DEFAULT_PORT, LOG_FILE, RSEED, THINK_DELAY,
                               Side, GameResult, Connect4Error)
from connect4net.ai.advisor import MoveAdvisor
from connect4net.game.board import Board
from connect4net.game.rules import ConnectFourGame, find_winner, get_result, winning_line
from connect4net.game.session import AdvisorPlayer, GameSession
from connect4net.interfaces.terminal import TerminalPlayer


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class RandomAdvisor(MoveAdvisor):
    """Advisor reduced to its random fallback."""

    def choose(self, board: Board, side: Side) -> int:
        return self.random_column(board)


class SimpleCLI:
    """Command-line interface for connect4net."""

    def __init__(self):
        """Initialize the CLI."""
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect-4 against a scripted opponent')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug_level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--debug_log', default=None, help='Also write log records to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a local game against the computer')
        play_parser.add_argument('--ai', choices=['advisor', 'random'], default='advisor',
                                 help='Opponent type')
        play_parser.add_argument('--seed', type=int, default=RSEED, help='Opponent random seed')
        play_parser.add_argument('--delay', type=float, default=THINK_DELAY,
                                 help='Seconds the opponent pretends to think')

        serve_parser = subparsers.add_parser('serve', help='Serve games to network clients')
        serve_parser.add_argument('--host', default=DEFAULT_HOST, help='Address to listen on')
        serve_parser.add_argument('--port', type=int, default=DEFAULT_PORT, help='Port to listen on')
        serve_parser.add_argument('--once', action='store_true', help='Serve a single game and exit')
        serve_parser.add_argument('--seed', type=int, default=RSEED, help='Advisor random seed')
        serve_parser.add_argument('--delay', type=float, default=THINK_DELAY,
                                  help='Seconds the advisor pretends to think')
        serve_parser.add_argument('--log-file', dest='log_file', default=LOG_FILE,
                                  help='Session log file')
        serve_parser.add_argument('--quiet', action='store_true', help='Do not print boards')

        connect_parser = subparsers.add_parser('connect', help='Play against a server')
        connect_parser.add_argument('host', help='Server host name')
        connect_parser.add_argument('port', type=int, help='Server port')

        analyze_parser = subparsers.add_parser('analyze', help='Analyse a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help=f'{WIDTH * HEIGHT} comma separated cells, bottom row first '
                                         f'(0 empty, 1 red, 2 yellow)')
        analyze_parser.add_argument('--seed', type=int, default=RSEED, help='Advisor random seed')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)
        elif self.args.command == 'serve':
            debug.configure(level=DebugLevel.INFO)

        if self.args.debug_log:
            debug.configure(log_file=self.args.debug_log)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        commands = {
            'play': self.play_game,
            'serve': self.serve,
            'connect': self.connect,
            'analyze': self.analyze_position,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            return command()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            return 130
        except (Connect4Error, OSError) as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def play_game(self) -> int:
        """Play a local game: the human is Yellow and moves first."""
        print("Welcome to connect-4 \n")
        print(f"Enter a column number (1-{WIDTH}), 'u' to undo, 'q' to quit.")

        advisor_cls = RandomAdvisor if self.args.ai == 'random' else MoveAdvisor
        human = TerminalPlayer(Side.YELLOW, allow_undo=True)
        computer = AdvisorPlayer(Side.RED, advisor_cls(self.args.seed), self.args.delay)

        GameSession(human, computer).run()
        print()
        return 0

    def serve(self) -> int:
        """Serve games until interrupted (or a single game with --once)."""
        from connect4net.net.server import GameServer

        server = GameServer(self.args.host, self.args.port, seed=self.args.seed,
                            delay=self.args.delay, log_file=self.args.log_file,
                            out=None if self.args.quiet else print)
        host, port = server.bind()
        print(f"Listening on {host}:{port}")
        try:
            server.serve_forever(once=self.args.once)
        finally:
            server.shutdown(timeout=1.0)
        return 0

    def connect(self) -> int:
        """Play Yellow against a remote server."""
        from connect4net.net.client import GameClient

        GameClient(self.args.host, self.args.port).play()
        print()
        return 0

    def analyze_position(self) -> int:
        """Print everything the engine can tell about a position."""
        board = Board.from_position(self.args.position)
        print("Loaded position:")
        print(board.render())

        winner = find_winner(board)
        if winner is not None:
            print(f"Winner: {winner} with line {winning_line(board)}")
        else:
            print("No win detected for any side")

        result = get_result(board)
        print(f"Result: {result.name}")
        if board.is_full():
            print("Board is full")
            return 0

        print(f"Valid columns: {board.get_valid_columns()}")
        if result == GameResult.IN_PROGRESS:
            for side in (Side.YELLOW, Side.RED):
                column = MoveAdvisor(self.args.seed).choose(board, side)
                print(f"Advisor suggests column {column} for {side}")
        return 0

    def benchmark(self) -> int:
        """Benchmark the engine."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} iterations...")
        rng = random.Random(RSEED)

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        board = Board()
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            if board.is_full():
                board = Board()
            board.apply(rng.choice(board.get_valid_columns()), Side.RED if moves_made % 2 else Side.YELLOW)
            moves_made += 1
        moves_time = debug.end_timer("moves")
        print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
              f"{moves_time / moves_made * 1000:.6f} ms per move")

        debug.start_timer("win_check")
        for _ in range(iterations):
            find_winner(board)
        win_check_time = debug.end_timer("win_check")
        print(f"Performing {iterations} win scans: {win_check_time:.6f} seconds total, "
              f"{win_check_time / iterations * 1000:.6f} ms per scan")

        games = max(1, iterations // 10)
        total_moves = 0
        advisor = MoveAdvisor(RSEED)
        debug.start_timer("advisor_games")
        for _ in range(games):
            game = ConnectFourGame()
            side = Side.YELLOW
            while not game.is_game_over():
                game.play(advisor.choose(game.board, side), side)
                side = side.other()
                total_moves += 1
        games_time = debug.end_timer("advisor_games")
        print(f"Played {games} advisor games with {total_moves} total moves: "
              f"{games_time:.6f} seconds total, "
              f"{games_time / total_moves * 1000:.6f} ms per move")

        debug.start_timer("rendering")
        for _ in range(iterations):
            board.render()
        rendering_time = debug.end_timer("rendering")
        print(f"Rendering board {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time / iterations * 1000:.6f} ms per render")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
