"""Configuration, input/output and plotting helpers for the analysis CLI."""
