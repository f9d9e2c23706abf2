"""Coordinator layer: planning, scheduling, templates, agent creation, channels and history."""