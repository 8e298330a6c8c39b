"""
Input snapshot, tick table and outcome models.

Handles parsing of raw form text and the immutable records that carry a
calculation request and its outcome.
"""
