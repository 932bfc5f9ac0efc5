"""Module types, the Starship and Oh My Zsh modules, the registry and the definition loader."""