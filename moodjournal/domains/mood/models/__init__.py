from moodjournal.domains.mood.models.mood_entry import MoodEntry

__all__ = ["MoodEntry"]
