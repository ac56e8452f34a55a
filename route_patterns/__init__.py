"""Repeated-route detection by geometric shape.

Builds bearing signatures from GPS tracks, compares them pairwise with a
weighted location/length/shape score, and groups similar routes with DBSCAN
over the precomputed similarity matrix.
"""
