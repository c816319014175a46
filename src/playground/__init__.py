"""HTTP playground for the completion core (Flask, JSON only)."""
