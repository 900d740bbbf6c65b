"""Environment facade and the interpreter hooks it installs."""
