"""
Algorithms package for the OS Resource Policy Simulator.
Contains CPU scheduling, Banker's safety check, page replacement,
disk scheduling and contiguous memory allocation implementations.
"""
