from .launch_api import LaunchAPI, LaunchProvider, launch_reducer

__all__ = ["LaunchAPI", "LaunchProvider", "launch_reducer"]
