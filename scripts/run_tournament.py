#!/usr/bin/env python3
"""
Play a match between two player types and report win rates.

Sides alternate between games unless --no-swap is given, so each player
moves first in half of the games.

Examples:

1. MCTS against random play at 9x9 Gomoku:
   python scripts/run_tournament.py --game gomoku --size 9 --first mcts --second random --num-games 20

2. Reproducible Othello match on iteration budgets:
   python scripts/run_tournament.py --game othello --first mcts --second greedy \
     --iterations 2000 --seed 42 --num-games 10
"""
import argparse
import logging
import sys

from board_ai.display import BasicDisplay
from board_ai.games import GAMES
from board_ai.players import PLAYER_TYPES, check_player_game, make_player
from board_ai.tournament import TournamentConfig, run_match
from board_ai.utils.random_utils import set_deterministic_seeds


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a match between two players")
    parser.add_argument('--game', choices=sorted(GAMES), default='gomoku', help='Game to play (default: gomoku)')
    parser.add_argument('--size', type=int, default=None, help='Board size (default: the game\'s default)')
    # Human players are left out: matches run unattended
    automatic = [p for p in PLAYER_TYPES if p != 'human']
    parser.add_argument('--first', choices=automatic, default='mcts', help='First participant (default: mcts)')
    parser.add_argument('--second', choices=automatic, default='random', help='Second participant (default: random)')
    parser.add_argument('--num-games', type=int, default=10, help='Number of games (default: 10)')
    parser.add_argument('--no-swap', action='store_true', help='First participant always moves first')
    parser.add_argument('--think', type=float, default=None, help='MCTS thinking time per move in seconds')
    parser.add_argument('--iterations', type=int, default=None,
                        help='MCTS iterations per move; replaces the thinking time')
    parser.add_argument('--bias', type=float, default=None, help='MCTS exploration weight c (default: 1.4)')
    parser.add_argument('--seed', type=int, default=None, help='Base random seed; game k uses seed + k')
    parser.add_argument('--verbose', type=int, default=1,
                        help='0 = summary only, 1 = progress, 2 = per-game results, 3 = full game display')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose >= 2 else logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    if args.seed is not None:
        set_deterministic_seeds(args.seed)

    board_cls = GAMES[args.game]

    def make_board():
        return board_cls() if args.size is None else board_cls(args.size)

    try:
        config = TournamentConfig(num_games=args.num_games, swap_sides=not args.no_swap, verbose=args.verbose)
        make_board()
        check_player_game(args.first, args.game)
        check_player_game(args.second, args.game)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # Each factory call gets its own seed so games differ but replay exactly
    seeds = {'first': args.seed, 'second': None if args.seed is None else args.seed + 10_000}

    def factory(kind, key):
        def build():
            seed = seeds[key]
            if seed is not None:
                seeds[key] += 1
            return make_player(kind, args.think, args.iterations, seed, args.bias)
        return build

    display = BasicDisplay(sys.stdout, verbosity=1) if args.verbose >= 3 else None
    print(f"Playing {config.num_games} games of {args.game}: {args.first} vs {args.second}")
    result = run_match(make_board, factory(args.first, 'first'), factory(args.second, 'second'),
                       config=config, display=display)
    result.print_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
