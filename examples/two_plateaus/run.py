"""
Example: Querying an analyzed map
=================================

WHAT THIS SHOWS:
- Loading a map document (grid arrays plus analyzer output) from JSON
- Region lookups and ground connectivity between base locations
- A* ground distances in pixels (-1 when unreachable)

RUN:
    python -m examples.two_plateaus.run
"""

from rtsmap import MapLoader, Position, Resolution
from rtsmap.config import Config


def main() -> None:
    print(Config.display())

    game_map = MapLoader().load("two_plateaus")
    print(game_map)

    bases = game_map.get_base_locations()
    home = game_map.get_start_locations()[0]
    print(f"Start location at {home.position}, region {home.region_id}")

    for base in bases:
        if base is home:
            continue
        distance = game_map.get_ground_distance(home.position, base.position)
        kind = "island" if base.island else "ground"
        print(f"  -> base at {base.position} ({kind}): {distance:.1f}px")

    corner = Position(0, 0, Resolution.BUILD)
    region = game_map.get_region(corner)
    print(f"Region at {corner}: {region.id if region else None}")


if __name__ == "__main__":
    main()
