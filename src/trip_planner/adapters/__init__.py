"""
Adapter implementations for the Trip Planner.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of storage, snapshots and bulk ingestion.
"""
