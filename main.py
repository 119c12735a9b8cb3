"""
Main entry point for the Conquest placement engine.
Demonstrates core functionality with a simple simulated scenario.
"""

from conquest.engine.definitions import load_board
from conquest.engine.game import Game
from conquest.engine.queries import get_game_summary, get_placeable_territories
from conquest.engine.state import Board, Player
from conquest.engine.utils import make_dice, print_game_state


def main():
    print("Conquest Placement Engine")
    print("=" * 60)

    # ===== SCENARIO 1: Scaled-down placement phase =====
    print("\n[SCENARIO 1: 3 players, 3 territories, 1 unit each]")
    board = Board.with_ids([1, 2, 3])
    game = Game(board, [Player(1), Player(2), Player(3)], dice=lambda: 1, starting_units=1)
    print(f"Turn order: {game.state.player_ids()}")

    for player_id, territory_id in [(1, 1), (2, 2), (3, 3)]:
        result = game.place_unit(player_id, territory_id)
        print(f"✓ Player {player_id} -> territory {territory_id}: {[e.type for e in result.events]}")

    print_game_state(game.state)

    # ===== SCENARIO 2: Rejected placements =====
    print("\n[SCENARIO 2: Rule violations on the classic board]")
    game = Game(load_board(), [Player(1), Player(2), Player(3)], dice=make_dice(sides=3))
    current = game.current_player_id
    print(f"Player {current} starts")

    other = next(pid for pid in game.state.player_ids() if pid != current)
    for player_id, territory_id in [(99, 1), (current, 999), (other, 1)]:
        result = game.place_unit(player_id, territory_id)
        print(f"✗ place_unit({player_id}, {territory_id}): {result.error.value} - {result.message}")

    game.place_unit(current, 1)
    result = game.place_unit(game.current_player_id, 1)
    print(f"✗ Claiming an owned territory: {result.error.value} - {result.message}")

    options = get_placeable_territories(game.state, game.current_player_id)
    print(f"Player {game.current_player_id} may place on {len(options)} territories")
    print(f"Summary: {get_game_summary(game.state)}")


if __name__ == "__main__":
    main()
