from nicegui import ui

SEVERITY_TYPES = {
    'success': 'positive',
    'info': 'info',
    'warning': 'warning',
    'error': 'negative'
}

RARITY_COLORS = {
    'common': 'grey-5',
    'uncommon': 'green-5',
    'rare': 'blue-5',
    'epic': 'purple-5',
    'legendary': 'orange-5'
}

def apply_theme():
    """Applies the global color theme to the application."""
    ui.colors(
        primary='#2b2118',   # Tavern brown
        secondary='#e0a458', # Amber
        accent='#c97b63',    # Copper
        dark='#17120d',      # Darker background
        positive='#8fbf6a',  # Green
        negative='#e06c60',  # Red
        info='#7fb7be',      # Teal
        warning='#f2cc8f'    # Yellow
    )
    # Force dark mode for the page
    ui.dark_mode().enable()
