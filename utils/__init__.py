# Main utils package - bracket resolution engine

from .team_resolution import (
    get_winner,
    get_loser,
    get_winner_by_scores,
    is_group_complete,
    get_team_names
)

from .standings import (
    resolve_group_standings,
    calculate_partial_group_table,
    select_group_outcomes,
    calculate_group_standings,
    standings_from_positions
)

from .third_place import (
    rank_third_placed_teams,
    build_qualifying_groups_key,
    resolve_third_place_slots
)

from .playoff_mapping import (
    build_slot_rules,
    resolve_playoff_slots
)

from .playoff_resolver import (
    PlayoffResolver,
    resolve_playoff_code
)
