"""Pick a display color for a team from the color word in its name."""

DEFAULT_COLOR = "#FFFF00"

# ordered: the first keyword found in the team name wins
TEAM_COLORS: tuple[tuple[str, str], ...] = (
    ("red", "#FF0000"),
    ("blue", "#0000FF"),
    ("green", "#00FF00"),
    ("yellow", "#FFFF00"),
    ("orange", "#FF8800"),
    ("purple", "#9900FF"),
    ("pink", "#FF00FF"),
    ("cyan", "#00FFFF"),
    ("gold", "#FFD700"),
    ("silver", "#C0C0C0"),
    ("bronze", "#CD7F32"),
    ("white", "#FFFFFF"),
    ("black", "#000000"),
    ("brown", "#8B4513"),
    ("lime", "#00FF00"),
    ("navy", "#000080"),
    ("teal", "#008080"),
    ("maroon", "#800000"),
    ("olive", "#808000"),
    ("aqua", "#00FFFF"),
    ("fuchsia", "#FF00FF"),
)


def color_for(team_name: str | None) -> str:
    """Return the hex color for a team name like "Team Red", or DEFAULT_COLOR."""
    lower_name = (team_name or "").lower()
    if not lower_name:
        return DEFAULT_COLOR
    for keyword, color in TEAM_COLORS:
        if keyword in lower_name:
            return color
    return DEFAULT_COLOR
