"""
Pydantic schemas for RescueLink Backend.

Contains all API request/response schemas organized by module.
"""

from .common import *
from .responses import *
from .volunteer import *
from .auth import *
from .emergency import *
from .assignment import *
from .notification import *
from .relief import *
