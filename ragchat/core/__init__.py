"""Core domain logic: session store, prompt assembly and exceptions."""
