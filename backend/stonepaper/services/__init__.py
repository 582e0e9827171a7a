"""Services behind the HTTP routes and socket handlers.

`match` is the in-memory session engine. The sibling modules are its
collaborators: the room directory, match history, outcome emails and the
dispatcher that feeds finished matches to the last two.
"""
