"""
hue-schedule - sunset-aware lighting schedule service
"""
__version__ = "0.1.0"
