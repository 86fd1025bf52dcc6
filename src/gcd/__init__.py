"""
Greatest common divisor computation.

Euclidean and binary (Stein) algorithms over two, three, or many signed
32-bit integers, with timed variants reporting elapsed duration.
"""
