"""HTTP surface for MindfulAI."""
