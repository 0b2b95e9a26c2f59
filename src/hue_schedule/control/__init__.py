"""
Schedule control - definition loading and the resolved schedule cache
"""
