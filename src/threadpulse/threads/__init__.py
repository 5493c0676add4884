"""
Thread subsystem.

Components:
- thread_models.py: data structures (Thread, ThreadsType, priority tier table)
- threads.py: the scheduler that dispatches threads on every pulse
- sleep.py: suspension helper for use inside thread bodies
- thread_api.py: map/iterate/foreach loops spread over many pulses
"""
