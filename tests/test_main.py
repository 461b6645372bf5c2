# tests/test_main.py
"""
Test suite per src/main.py.

Copre:
- main(): argomenti insufficienti -> sys.exit(1)
- main(): parsing argomenti (yaml, output, flags)
- main(): flusso normale completo
- main(): grafico (--visualize, -v, oppure visualize nel YAML)
- main(): --upper / -u e --log / -l
- main(): FileNotFoundError, EnvelopeError, eccezione generica -> sys.exit(1)
"""

import sys
import types
import pytest
from unittest.mock import MagicMock, patch

from envelopes.errors import MalformedMonotoneInput


# =============================================================================
# SETUP MOCK MODULI
# Prima di importare main, sostituiamo generator e logger
# =============================================================================

def _make_mock_generator_module():
    mod = types.ModuleType('generator')
    mock_cls = MagicMock()
    mock_instance = MagicMock()
    mock_instance.config.visualize = False
    mock_instance.plot_path_for.side_effect = lambda path: path.rsplit('.', 1)[0] + '.png'
    mock_cls.return_value = mock_instance
    mod.Generator = mock_cls
    return mod, mock_cls, mock_instance


def _make_mock_logger_module():
    mod = types.ModuleType('logger')
    mod.configure_envelope_logger = MagicMock()
    mod.get_envelope_log_path = MagicMock(return_value=None)
    return mod


# =============================================================================
# FIXTURE CENTRALE
# =============================================================================

@pytest.fixture
def mocks():
    """Importa main con Generator e logger sostituiti da mock freschi."""
    gen_mod, gen_cls, gen_inst = _make_mock_generator_module()
    log_mod = _make_mock_logger_module()

    mock_modules = {
        'engine.generator': gen_mod,
        'shared.logger': log_mod,
    }

    with patch.dict(sys.modules, mock_modules):
        if 'main' in sys.modules:
            del sys.modules['main']

        import importlib
        main_mod = importlib.import_module('main')

    return {
        'main': main_mod,
        'Generator': gen_cls,
        'generator_instance': gen_inst,
        'configure_envelope_logger': log_mod.configure_envelope_logger,
        'get_envelope_log_path': log_mod.get_envelope_log_path,
    }


def run_main(mocks, argv_list):
    with patch.object(sys, 'argv', argv_list):
        mocks['main'].main()


# =============================================================================
# TEST ARGOMENTI INSUFFICIENTI
# =============================================================================

class TestInsufficientArguments:

    def test_no_args_exits_with_1(self, mocks):
        with pytest.raises(SystemExit) as exc_info:
            run_main(mocks, ['main.py'])
        assert exc_info.value.code == 1

    def test_only_flags_exits_with_1(self, mocks):
        with pytest.raises(SystemExit):
            run_main(mocks, ['main.py', '--upper'])

    def test_no_args_prints_usage(self, mocks, capsys):
        with pytest.raises(SystemExit):
            run_main(mocks, ['main.py'])
        captured = capsys.readouterr()
        assert 'python main.py' in captured.out
        assert '.yml' in captured.out


# =============================================================================
# TEST FLUSSO NORMALE
# =============================================================================

class TestNormalFlow:

    def test_generator_created_with_yaml_path(self, mocks):
        run_main(mocks, ['main.py', 'curves.yml', 'out.yml'])
        mocks['Generator'].assert_called_once_with('curves.yml', env_type=None)

    def test_pipeline_called_in_order(self, mocks):
        run_main(mocks, ['main.py', 'curves.yml', 'out.yml'])
        inst = mocks['generator_instance']
        names = [c[0] for c in inst.method_calls if c[0] != 'plot_path_for']
        assert names == ['load_yaml', 'create_elements', 'generate_output_file']

    def test_output_file_passed(self, mocks):
        run_main(mocks, ['main.py', 'curves.yml', 'out.yml'])
        mocks['generator_instance'].generate_output_file.assert_called_once_with('out.yml')

    def test_default_output_file(self, mocks):
        run_main(mocks, ['main.py', 'curves.yml'])
        mocks['generator_instance'].generate_output_file.assert_called_once_with('envelope.yml')

    def test_success_message(self, mocks, capsys):
        run_main(mocks, ['main.py', 'curves.yml'])
        assert 'Envelope completato' in capsys.readouterr().out

    def test_no_plot_by_default(self, mocks):
        run_main(mocks, ['main.py', 'curves.yml'])
        mocks['generator_instance'].generate_plot.assert_not_called()


# =============================================================================
# TEST FLAG
# =============================================================================

class TestFlags:

    @pytest.mark.parametrize("flag", ['--visualize', '-v'])
    def test_visualize_flag(self, mocks, flag):
        run_main(mocks, ['main.py', 'curves.yml', 'out.yml', flag])
        mocks['generator_instance'].generate_plot.assert_called_once_with('out.png')

    def test_visualize_from_yaml(self, mocks):
        mocks['generator_instance'].config.visualize = True
        run_main(mocks, ['main.py', 'curves.yml'])
        mocks['generator_instance'].generate_plot.assert_called_once_with('envelope.png')

    @pytest.mark.parametrize("flag", ['--upper', '-u'])
    def test_upper_flag(self, mocks, flag):
        run_main(mocks, ['main.py', flag, 'curves.yml'])
        mocks['Generator'].assert_called_once_with('curves.yml', env_type='upper')

    def test_logger_configured_without_file(self, mocks):
        run_main(mocks, ['main.py', 'data/curves.yml'])
        mocks['configure_envelope_logger'].assert_called_once_with(
            file_enabled=False, log_name='curves'
        )

    @pytest.mark.parametrize("flag", ['--log', '-l'])
    def test_log_flag(self, mocks, flag):
        run_main(mocks, ['main.py', 'curves.yml', flag])
        mocks['configure_envelope_logger'].assert_called_once_with(
            file_enabled=True, log_name='curves'
        )

    def test_log_path_printed(self, mocks, capsys):
        mocks['get_envelope_log_path'].return_value = '/tmp/envelope_curves.log'
        run_main(mocks, ['main.py', 'curves.yml', '-l'])
        assert '/tmp/envelope_curves.log' in capsys.readouterr().out


# =============================================================================
# TEST ERRORI
# =============================================================================

class TestErrors:

    def test_file_not_found(self, mocks, capsys):
        mocks['generator_instance'].load_yaml.side_effect = FileNotFoundError()
        with pytest.raises(SystemExit) as exc_info:
            run_main(mocks, ['main.py', 'missing.yml'])
        assert exc_info.value.code == 1
        assert "'missing.yml' non trovato" in capsys.readouterr().out

    def test_envelope_error(self, mocks, capsys):
        mocks['generator_instance'].create_elements.side_effect = MalformedMonotoneInput(
            (0, 1), [], [], reason='test'
        )
        with pytest.raises(SystemExit) as exc_info:
            run_main(mocks, ['main.py', 'curves.yml'])
        assert exc_info.value.code == 1
        assert 'Errore strutturale' in capsys.readouterr().out

    def test_generic_exception(self, mocks, capsys):
        mocks['generator_instance'].create_elements.side_effect = RuntimeError('boom')
        with pytest.raises(SystemExit) as exc_info:
            run_main(mocks, ['main.py', 'curves.yml'])
        assert exc_info.value.code == 1
        assert 'boom' in capsys.readouterr().out

    def test_output_not_written_after_error(self, mocks):
        mocks['generator_instance'].create_elements.side_effect = RuntimeError('boom')
        with pytest.raises(SystemExit):
            run_main(mocks, ['main.py', 'curves.yml'])
        mocks['generator_instance'].generate_output_file.assert_not_called()
