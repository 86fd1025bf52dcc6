"""
Performance analysis of the GCD algorithms.

Includes input generation, per-case timing, and summary statistics for
comparing the Euclidean and Stein implementations.
"""
