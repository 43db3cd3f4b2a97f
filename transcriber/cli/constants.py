# transcriber/cli/constants.py
"""CLI constants and styling."""

# Nord color scheme
NORD_YELLOW = "#ebcb8b"  # nord13
NORD_GREEN = "#a3be8c"  # nord14
NORD_BLUE = "#88c0d0"  # nord8
NORD_CYAN = "#8fbcbb"  # nord7
