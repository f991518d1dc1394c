"""
Vendor self-service.

Responsibilities:
- Validate and save vendor profiles from the profile form.
- Run the scripted onboarding chat that pre-fills the profile form.
- Accept customer reviews and keep each vendor's rating aggregate current.
"""
