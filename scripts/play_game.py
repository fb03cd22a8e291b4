#!/usr/bin/env python3
"""
Play one game of Gomoku or Othello in the terminal.

Examples:

1. Human (Black) against MCTS on the default 11x11 Gomoku board:
   python scripts/play_game.py --game gomoku --first human --second mcts --think 2.0

2. Watch MCTS play the greedy player at Othello:
   python scripts/play_game.py --game othello --first mcts --second greedy

3. Let MCTS solve tactical Gomoku position 2 and compare with the known answer:
   python scripts/play_game.py --position 2 --think 5.0 -v
"""
import argparse
import logging
import sys

from board_ai.config import VERBOSE_LEVEL
from board_ai.display import BasicDisplay
from board_ai.games import GAMES
from board_ai.games.gomoku_positions import POSITIONS, load_position
from board_ai.play import play_game
from board_ai.players import PLAYER_TYPES, check_player_game, make_player


def solve_position(number: int, args) -> int:
    board, position = load_position(number)
    print(f"Position {number}: {position.name}. {position.description}")
    print(board)
    engine = make_player('mcts', args.think, args.iterations, args.seed, args.bias)
    report = engine.search(board)
    solutions = position.solution_moves(board)
    print(f"Chosen move: {board.format_move(report.move)} "
          f"after {report.iterations} iterations ({report.node_count} nodes)")
    print("Known answers: " + ", ".join(board.format_move(m) for m in sorted(solutions)))
    print("Correct" if report.move in solutions else "Incorrect")
    return 0 if report.move in solutions else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Play Gomoku or Othello in the terminal")
    parser.add_argument('--game', choices=sorted(GAMES), default='gomoku', help='Game to play (default: gomoku)')
    parser.add_argument('--size', type=int, default=None, help='Board size (default: the game\'s default)')
    parser.add_argument('--first', choices=PLAYER_TYPES, default='human', help='Player moving first (default: human)')
    parser.add_argument('--second', choices=PLAYER_TYPES, default='mcts', help='Player moving second (default: mcts)')
    parser.add_argument('--think', type=float, default=None, help='MCTS thinking time per move in seconds')
    parser.add_argument('--iterations', type=int, default=None,
                        help='MCTS iterations per move; replaces the thinking time')
    parser.add_argument('--bias', type=float, default=None, help='MCTS exploration weight c (default: 1.4)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for MCTS and random players')
    parser.add_argument('--position', type=int, choices=sorted(POSITIONS), default=None,
                        help='Solve a tactical 9x9 Gomoku position with MCTS instead of playing')
    parser.add_argument('--display-verbosity', type=int, default=VERBOSE_LEVEL,
                        help=f'Game display detail, 0-3 (default: {VERBOSE_LEVEL})')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log search statistics')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if args.position is not None:
        return solve_position(args.position, args)

    board_cls = GAMES[args.game]
    try:
        board = board_cls() if args.size is None else board_cls(args.size)
        check_player_game(args.first, args.game)
        check_player_game(args.second, args.game)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    first = make_player(args.first, args.think, args.iterations, args.seed, args.bias)
    second = make_player(args.second, args.think, args.iterations,
                         None if args.seed is None else args.seed + 1, args.bias)
    display = BasicDisplay(sys.stdout, verbosity=args.display_verbosity)
    play_game(board, first, second, display)
    return 0


if __name__ == "__main__":
    sys.exit(main())
