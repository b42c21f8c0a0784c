"""goaltrack: goal, milestone and task tracking over a managed Supabase backend."""

__version__ = "0.4.0"
