"""Agenda Service.

Personal task, project and calendar management: calendars, tasks and projects
with milestones, month/week/day calendar grids, search, toast notifications
and a first-run tutorial, backed by a hosted auth + database service.
"""

__version__ = "0.1.0"
