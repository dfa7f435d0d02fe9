"""
MindfulAI Therapy - onboarding backend.

Packages:
- mindful: application shell (settings, Supabase client, web app, CLI)
- onboarding: welcome -> symptoms -> account flow and auth form logic
"""

__version__ = "1.0.0"
