"""Levant staff time clock.

Feature modules (employees, timelogs, reports, settings, shifts) sit on top of
a generic record store. All mutations go through the application state
controller in ``levant.state``; Flask controllers are a thin JSON layer.
"""

__version__ = "1.0.0"
