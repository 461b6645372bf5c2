from engine.generator import Generator
from envelopes.errors import EnvelopeError
from shared.logger import configure_envelope_logger, get_envelope_log_path
# =============================================================================
# MAIN
# =============================================================================

USAGE = "Uso: python main.py <curves.yml> [output.yml] [--visualize|-v] [--upper|-u] [--log|-l]"


def main():
    import sys
    import os

    args = [a for a in sys.argv[1:] if not a.startswith('-')]
    flags = [a for a in sys.argv[1:] if a.startswith('-')]

    # Verifica argomenti
    if len(args) < 1:
        print(USAGE)
        sys.exit(1)

    yaml_file = args[0]
    output_file = args[1] if len(args) > 1 else 'envelope.yml'
    visualize = '--visualize' in flags or '-v' in flags
    env_type = 'upper' if ('--upper' in flags or '-u' in flags) else None
    file_log = '--log' in flags or '-l' in flags

    yaml_basename = os.path.splitext(os.path.basename(yaml_file))[0]
    configure_envelope_logger(file_enabled=file_log, log_name=yaml_basename)

    try:
        generator = Generator(yaml_file, env_type=env_type)

        print(f"Caricamento {yaml_file}...")
        generator.load_yaml()

        print("Calcolo envelope...")
        generator.create_elements()

        print("Scrittura diagramma...")
        generator.generate_output_file(output_file)

        if visualize or generator.config.visualize:
            generator.generate_plot(generator.plot_path_for(output_file))

        log_path = get_envelope_log_path()
        if log_path:
            print(f"Log: {log_path}")

        print("\n✓ Envelope completato!")

    except FileNotFoundError:
        print(f"✗ Errore: file '{yaml_file}' non trovato")
        sys.exit(1)
    except EnvelopeError as e:
        print(f"✗ Errore strutturale: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"✗ Errore: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
