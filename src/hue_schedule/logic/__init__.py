"""
Schedule logic - time resolution, sunset lookup, daily resolution and interpolation
"""
