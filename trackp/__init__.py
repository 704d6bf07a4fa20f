"""
TrackP - project and task tracking REST service.
"""
__version__ = "0.1.0"
