# LCG Lab
"""
Linear congruential generator lab: sequence generation, period detection
and Cesàro π estimation, with an independent reference sequence.
"""

__version__ = "1.0.0"
