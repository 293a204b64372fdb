"""
Adapter implementations for the flight scheduler.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of storage engines and schedule rules.
"""
