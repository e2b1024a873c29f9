"""
Facility Insights Engine – derive region coverage, data-quality flags, alerts and
search results from a flat list of healthcare facility records.
Served through a FastAPI backend (api.py) and an argparse CLI (main.py).
"""

__version__ = "0.1.0"
