"""
SCMS backend: сервисы записей водителей и отправок.
"""

__version__ = "1.0.0"
