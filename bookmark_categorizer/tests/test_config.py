from unittest.mock import patch

import pytest

from bookmark_categorizer.config.config import Config


def test_validate_defaults():
    with patch.object(Config, 'LLM_BATCH_SIZE', '10'), \
            patch.object(Config, 'LLM_BATCH_DELAY_SECONDS', '1.0'), \
            patch.object(Config, 'LLM_TIMEOUT_SECONDS', '30'), \
            patch.object(Config, 'HUGGINGFACE_API_KEY', None):
        settings = Config.validate()

    assert settings['batch_size'] == 10
    assert settings['batch_delay'] == 1.0
    assert settings['timeout'] == 30.0
    assert settings['remote_enabled'] is False


def test_validate_reports_every_invalid_setting():
    with patch.object(Config, 'LLM_BATCH_SIZE', '0'), \
            patch.object(Config, 'LLM_BATCH_DELAY_SECONDS', 'soon'), \
            patch.object(Config, 'LLM_TIMEOUT_SECONDS', '-1'):
        with pytest.raises(ValueError) as exc_info:
            Config.validate()

    message = str(exc_info.value)
    assert 'LLM_BATCH_SIZE' in message
    assert 'LLM_BATCH_DELAY_SECONDS' in message
    assert 'LLM_TIMEOUT_SECONDS' in message


def test_validate_skips_named_settings():
    with patch.object(Config, 'LLM_BATCH_SIZE', 'many'), \
            patch.object(Config, 'LLM_BATCH_DELAY_SECONDS', '1.0'), \
            patch.object(Config, 'LLM_TIMEOUT_SECONDS', '30'):
        settings = Config.validate(skip=['LLM_BATCH_SIZE'])

    assert settings['batch_size'] is None
    assert settings['batch_delay'] == 1.0
