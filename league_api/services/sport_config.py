"""
Sport-specific configuration for rosters.
This module defines which player positions are valid for each sport.
"""

from typing import Dict, List

from league_api.models import SportType

# Positions a roster entry may take, per sport
SPORT_POSITIONS: Dict[SportType, List[str]] = {
    SportType.BASEBALL: [
        'Pitcher',
        'Catcher',
        'First Base',
        'Second Base',
        'Shortstop',
        'Third Base',
        'Left Field',
        'Center Field',
        'Right Field',
        'Designated Hitter',
    ],
    SportType.SOCCER: [
        'Goalkeeper',
        'Forward',
        'Defender',
        'Midfielder',
    ],
    SportType.BASKETBALL: [
        'Point Guard',
        'Shooting Guard',
        'Small Forward',
        'Power Forward',
        'Center',
    ],
    SportType.HOCKEY: [
        'Goaltender',
        'Defenseman',
        'Center',
        'Left Wing',
        'Right Wing',
    ],
    SportType.FOOTBALL: [
        'Quarterback',
        'Running Back',
        'Wide Receiver',
        'Tight End',
        'Offensive Lineman',
        'Defensive Lineman',
        'Linebacker',
        'Cornerback',
        'Safety',
        'Kicker',
        'Punter',
    ],
}


def get_positions(sport: SportType | str) -> List[str]:
    """Return the valid positions for a sport (empty list for unknown sports)."""
    if not isinstance(sport, SportType):
        try:
            sport = SportType(sport)
        except ValueError:
            return []
    return list(SPORT_POSITIONS.get(sport, []))


def is_valid_position(sport: SportType | str, position: str | None) -> bool:
    return bool(position) and position in get_positions(sport)


__all__ = ['SPORT_POSITIONS', 'get_positions', 'is_valid_position']
