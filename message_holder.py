import argparse
import logging
import sys
from pathlib import Path
import yaml

DEFAULT_MESSAGE = "Default Message"
GREETING = "Hello from Java!"

DEFAULT_CONFIG = {
    'message': GREETING,
}

# Options reconnues ; tout le reste de la ligne de commande est ignoré
FLAG_OPTIONS = ('-v', '--verbose')
VALUE_OPTIONS = {'-c': '--config', '--config': '--config', '--log-file': '--log-file'}

_installed_handlers = []


class ConfigError(Exception):
    pass


# --- Objet principal ---

class MessageHolder:
    """
    Conteneur mutable d'un unique message texte.
    Le constructeur par défaut passe par le constructeur explicite via DEFAULT_MESSAGE.
    """

    def __init__(self, message=DEFAULT_MESSAGE):
        self._message = message

    def get_message(self):
        return self._message

    def set_message(self, message):
        self._message = message

    def print_message(self):
        """Écrit le message suivi d'un saut de ligne sur la sortie standard."""
        print(self._message)

    def __repr__(self):
        return f"MessageHolder(message={self._message!r})"


# --- Fonctions utilitaires ---

def setup_logging(verbose, log_file_path=None):
    logger = logging.getLogger()
    # On ne retire que les handlers posés par un appel précédent
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.INFO)
    # StreamHandler écrit sur stderr : stdout reste réservé au message
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)
    if log_file_path:
        log_file_path = Path(log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

def load_config(config_path, encoding='utf-8'):
    """
    Charge un fichier YAML et le fusionne avec DEFAULT_CONFIG.
    Lève ConfigError si le fichier est absent, illisible ou mal formé.
    """
    config_path = Path(config_path)
    config = DEFAULT_CONFIG.copy()
    if not config_path.is_file():
        raise ConfigError(f"Fichier de configuration introuvable : '{config_path}'")
    try:
        with open(config_path, 'r', encoding=encoding) as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Impossible de parser le fichier de configuration '{config_path}': {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Impossible de lire le fichier de configuration '{config_path}': {e}") from e

    if loaded is None:  # fichier vide
        return config
    if not isinstance(loaded, dict):
        raise ConfigError(f"Le fichier de configuration '{config_path}' doit contenir un dictionnaire YAML.")
    config.update(loaded)

    if not isinstance(config.get('message'), str):
        raise ConfigError(f"La clé 'message' de '{config_path}' doit être une chaîne de caractères.")
    return config

def split_arguments(argv):
    """
    Sépare les options reconnues du reste de la ligne de commande.
    Seules les formes exactes sont retenues : '-h', '-vq' ou '--verbose=1' sont ignorés.
    """
    known, ignored = [], []
    remaining = iter(argv)
    for arg in remaining:
        name, sep, value = arg.partition('=')
        if arg in FLAG_OPTIONS:
            known.append(arg)
        elif arg in VALUE_OPTIONS:
            value = next(remaining, None)
            if value is None:
                ignored.append(arg)
            else:
                # Forme '--option=valeur' : la valeur peut commencer par '-'
                known.append(f"{VALUE_OPTIONS[arg]}={value}")
        elif sep and name.startswith('--') and name in VALUE_OPTIONS:
            known.append(arg)
        else:
            ignored.append(arg)
    return known, ignored

def build_parser():
    parser = argparse.ArgumentParser(
        description="Affiche un message de démonstration sur la sortie standard.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument('-c', '--config', type=str, help="Chemin vers un fichier de configuration YAML.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Affiche des informations détaillées sur stderr.")
    parser.add_argument('--log-file', type=str, help="Écrit également le journal dans ce fichier.")
    return parser


# --- Fonction principale ---

def main(argv=None):
    known, ignored = split_arguments(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(known)

    try:
        setup_logging(args.verbose, args.log_file)
    except OSError as e:
        sys.exit(f"ERREUR: Impossible d'ouvrir le fichier de log '{args.log_file}': {e}")
    if ignored:
        logging.info(f"Arguments ignorés : {' '.join(ignored)}")

    message = GREETING
    if args.config:
        try:
            config = load_config(args.config)
        except ConfigError as e:
            sys.exit(f"ERREUR: {e}")
        message = config['message']
        logging.info(f"Configuration chargée depuis '{args.config}'")

    holder = MessageHolder(message)
    logging.info(f"Affichage de {holder!r}")
    holder.print_message()
    return 0

if __name__ == '__main__':
    sys.exit(main())
