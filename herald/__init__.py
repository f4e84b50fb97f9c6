"""
HERALD - Historical Examples Ranked for Adaptive Letter Drafting

The learning store behind a cover letter generator. Every generated letter is
recorded, users rate letters after the fact, and the best-rated letters for a
similar role and tone are served back as reference examples for the next draft.

Architecture:
- Learning Context: record persistence, feedback ingestion, example selection
  and summary statistics
- Utils: logging, pipeline event log, timestamps
"""

__version__ = "0.1.0"
