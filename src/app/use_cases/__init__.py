"""
Use Cases

Organized into domain folders:
- family/: Invite lifecycle, acceptance and membership
- subscription/: Plan transitions and the family cascade
- sweeper/: Scheduled expiry sweeps

Import from subdirectories for better organization.
"""
