"""
Routers module - API endpoint handlers organized by feature.

- google_auth: Google sign-in / sign-out for the session
- layout: Grid seeding and change reports (persisted to Drive)
- widgets: Rendered Classroom, Drive and GitHub panels
"""
