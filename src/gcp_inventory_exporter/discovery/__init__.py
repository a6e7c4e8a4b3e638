"""Project discovery"""

from .projects import ProjectDirectory
