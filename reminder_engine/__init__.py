"""Time-based reminder engine for appointments and calendar events."""
