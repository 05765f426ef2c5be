"""Reading-lesson tile tokenizer and lesson-plan importer package."""

from .models import DictationSection, LessonRecord, Tile, WordCard

__all__ = ["Tile", "WordCard", "DictationSection", "LessonRecord"]
