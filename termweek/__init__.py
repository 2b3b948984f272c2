"""termweek: academic calendar, teaching-week and class recurrence resolver."""
