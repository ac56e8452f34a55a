"""Behavioral clustering of activities.

Provides the building blocks for grouping activities by their numeric
attributes: feature extraction, z-score standardization, seeded k-means++
fitting, silhouette evaluation, and automatic selection of the cluster count.
"""
