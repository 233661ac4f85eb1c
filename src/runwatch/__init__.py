"""Supervise a UI automation tool on a pseudo-terminal.

runwatch launches an automation tool, classifies every line it prints,
hands the lines to listeners, and relaunches the tool until the automation
script is known to be running.
"""

__version__ = "0.1.0"
