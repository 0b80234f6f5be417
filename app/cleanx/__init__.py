"""cleanx - disk cleanup engine.

Discovers reclaimable filesystem artifacts, classifies them by deletion
safety, and removes selected entries with a preview-then-journal workflow.
"""

__version__ = "0.4.0"
