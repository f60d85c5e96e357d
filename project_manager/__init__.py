"""Project manager - projects, tasks, teams, tickets and a client portal."""
