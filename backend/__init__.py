"""
Data layer for the lending app.

Nothing in here renders UI. Modules talk to the hosted backend (Supabase)
through the client objects handed to them, so tests can pass a fake.
"""
