"""Birthday greeter: stores birthdates and counts down to the next one."""

__version__ = "0.1.0"
