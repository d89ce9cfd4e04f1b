"""sessionsight -- Screenshot session summarization via vision LLMs.

This package turns an ordered sequence of captured screenshots into a
structured session summary by handing the images to a remote
vision-capable chat model and repairing its JSON reply into a strict
schema.
"""

__version__ = "0.1.0"
