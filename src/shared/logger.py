# =============================================================================
# logger.py - Logging per costruzione envelope (merge, segmenti verticali)
# =============================================================================
import logging
from datetime import datetime
import os

# =============================================================================
# CONFIGURAZIONE
# =============================================================================
ENVELOPE_LOG_CONFIG = {
    'enabled': True,                    # Master switch: False disabilita tutto
    'console_enabled': True,            # Stampa su terminale (solo WARNING+)
    'file_enabled': False,              # Scrive su file (DEBUG+)
    'log_dir': './logs',                # Directory per i file di log
    'log_name': None,                   # None = auto-genera con timestamp
    'log_merges': False,                # Logga ogni singolo merge
}

_envelope_logger = None
_envelope_logger_initialized = False


# =============================================================================
# FUNZIONI PUBBLICHE
# =============================================================================

def configure_envelope_logger(
    enabled=True,
    console_enabled=True,
    file_enabled=False,
    log_dir='./logs',
    log_name=None,
    log_merges=False
):
    """
    Configura il logger dell'envelope.
    Chiamare PRIMA di costruire gli envelope.

    Args:
        enabled: Master switch - se False, nessun logging
        console_enabled: Se True, stampa warning su terminale
        file_enabled: Se True, scrive su file
        log_dir: Directory dove salvare i file di log
        log_name: Nome base del file (es. nome dello YAML senza estensione)
                  Il file sara': envelope_{log_name}.log
        log_merges: Se True, logga un riepilogo per ogni merge
    """
    global _envelope_logger, _envelope_logger_initialized

    ENVELOPE_LOG_CONFIG['enabled'] = enabled
    ENVELOPE_LOG_CONFIG['console_enabled'] = console_enabled
    ENVELOPE_LOG_CONFIG['file_enabled'] = file_enabled
    ENVELOPE_LOG_CONFIG['log_dir'] = log_dir
    ENVELOPE_LOG_CONFIG['log_name'] = log_name
    ENVELOPE_LOG_CONFIG['log_merges'] = log_merges

    # Reset logger per ri-inizializzazione
    if _envelope_logger is not None:
        for handler in _envelope_logger.handlers[:]:
            handler.close()
            _envelope_logger.removeHandler(handler)
    _envelope_logger = None
    _envelope_logger_initialized = False


def get_envelope_logger():
    """
    Ottiene il logger dell'envelope (lazy initialization).
    Rispetta la configurazione in ENVELOPE_LOG_CONFIG.

    Returns:
        logging.Logger o None se disabilitato
    """
    global _envelope_logger, _envelope_logger_initialized

    if _envelope_logger_initialized:
        return _envelope_logger

    _envelope_logger_initialized = True

    if not ENVELOPE_LOG_CONFIG['enabled']:
        _envelope_logger = None
        return None

    if not ENVELOPE_LOG_CONFIG['console_enabled'] and not ENVELOPE_LOG_CONFIG['file_enabled']:
        _envelope_logger = None
        return None

    _envelope_logger = logging.getLogger('envelope2d')
    _envelope_logger.setLevel(logging.DEBUG)
    _envelope_logger.propagate = False
    _envelope_logger.handlers = []

    # === FILE HANDLER ===
    if ENVELOPE_LOG_CONFIG['file_enabled']:
        log_dir = ENVELOPE_LOG_CONFIG['log_dir']
        os.makedirs(log_dir, exist_ok=True)

        if ENVELOPE_LOG_CONFIG.get('log_name'):
            log_filename = f"envelope_{ENVELOPE_LOG_CONFIG['log_name']}.log"
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f'envelope_{timestamp}.log'

        log_path = os.path.join(log_dir, log_filename)

        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        _envelope_logger.addHandler(file_handler)

    # === CONSOLE HANDLER ===
    if ENVELOPE_LOG_CONFIG['console_enabled']:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('ENVELOPE: %(message)s'))
        _envelope_logger.addHandler(console_handler)

    return _envelope_logger


def get_envelope_log_path():
    """
    Ritorna il percorso del file di log corrente (se esiste).

    Returns:
        str o None
    """
    if _envelope_logger is None:
        return None

    for handler in _envelope_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


def log_merge_summary(env_type, size1, size2, size_out, crossings, dropped):
    """
    Logga il riepilogo di un merge (solo se log_merges e' attivo).

    Args:
        env_type: 'lower' o 'upper'
        size1, size2: numero di vertici dei diagrammi in ingresso
        size_out: numero di vertici del diagramma risultante
        crossings: intersezioni trovate durante lo sweep
        dropped: vertici ridondanti eliminati
    """
    if not ENVELOPE_LOG_CONFIG['log_merges']:
        return
    logger = get_envelope_logger()
    if logger is None:
        return

    logger.debug(
        f"[MERGE] {env_type:<5} | "
        f"in={size1:>5} + {size2:>5} | "
        f"out={size_out:>5} | "
        f"crossings={crossings:>4} | "
        f"dropped={dropped:>4}"
    )


def log_vertical_discarded(env_type, x, extreme, envelope_y):
    """Logga un segmento verticale dominato dall'envelope."""
    logger = get_envelope_logger()
    if logger is None:
        return

    logger.debug(
        f"[VERTICAL] {env_type:<5} | x={x} | "
        f"estremo={extreme} dominato da y={envelope_y}"
    )


def log_build_summary(env_type, n_input, n_regular, n_vertical, n_vertices):
    """Logga il riepilogo finale di una costruzione."""
    logger = get_envelope_logger()
    if logger is None:
        return

    logger.info(
        f"[BUILD] {env_type:<5} | "
        f"curve={n_input} (regolari={n_regular}, verticali={n_vertical}) | "
        f"vertici={n_vertices}"
    )


def log_build_error(env_type, error):
    """Logga un errore strutturale prima che venga propagato."""
    logger = get_envelope_logger()
    if logger is None:
        return

    logger.warning(f"[ERROR] {env_type} | {error.__class__.__name__}: {error}")
