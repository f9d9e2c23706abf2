"""Persistent shared memory with keyword search and context assembly."""