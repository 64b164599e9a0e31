"""
Weekly schedule synthesis: conflict-checked timetables from selected course sections.
"""
__version__ = "0.1.0"
