"""Office Time Tracker package.

Single-user attendance tracking: punch in/out, breaks with an early-arrival
allowance, daily work-time compliance and day rollover into history.
Organized as feature modules with a thin Flask controller layer over
service/repository layers.
"""
