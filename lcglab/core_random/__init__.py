# Core Random Module
"""
Core pseudo-random sequence implementations including:
- Modular arithmetic (LCG step, gcd, Hull-Dobell check)
- Linear congruential generator
- Reference uniform sequence generator
- Period detection
- Cesàro π estimation
"""
