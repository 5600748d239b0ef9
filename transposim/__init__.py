"""
transposim: Wright-Fisher simulation of bacterial genomes shaped by transposons.
"""

__version__ = "1.0.0"
