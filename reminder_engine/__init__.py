"""
Reminder Engine - Source Package

Recurrence expansion, month calendars, due-status classification and
upcoming schedules for a personal finance tracker's reminders.

DESIGN PRINCIPLES:
1. Reminder records are read, never mutated
2. Invalid input fails loudly; nothing is silently repaired
3. Every engine function is pure and bounded in work
4. Storage is a collaborator behind an interface
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
