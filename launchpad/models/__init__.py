from .launch import Launch, LaunchQueryParameters, Mission, Rocket
from .pagination import Page

__all__ = [
    "Launch",
    "LaunchQueryParameters",
    "Mission",
    "Rocket",
    "Page",
]
