"""Calm Planner - a calm week planner with a focus timer."""
