"""HTTP host application for the contact directory."""
