# Herramientas de línea de comandos (ver pyproject.toml → [project.scripts])
