"""
Business logic services for vpc_file.
"""

from vpc_file.services.volume_service import VolumeService

__all__ = [
    "VolumeService",
]
