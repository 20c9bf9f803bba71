"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation on first startup
- db: Database configuration and connection management
- errors: Error taxonomy shared by services and the HTTP layer
- randoms: Random string generation
- security: Password hashing and session token signing
- session: Session identity and validity policies
"""
