import os
from typing import Dict, Any, Iterable
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class"""
    # Remote classifier settings
    HUGGINGFACE_API_KEY = os.getenv('HUGGINGFACE_API_KEY')
    LLM_PROVIDER = os.getenv('LLM_PROVIDER', 'novita')
    LLM_MODEL_ID = os.getenv('LLM_MODEL_ID', 'deepseek-ai/DeepSeek-V3-0324')
    LLM_TIMEOUT_SECONDS = os.getenv('LLM_TIMEOUT_SECONDS', '30')

    # Batch settings (chunk size and minimum spacing between remote requests)
    LLM_BATCH_SIZE = os.getenv('LLM_BATCH_SIZE', '10')
    LLM_BATCH_DELAY_SECONDS = os.getenv('LLM_BATCH_DELAY_SECONDS', '1.0')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls, skip: Iterable[str] = ()) -> Dict[str, Any]:
        """Validate configuration settings and return them in typed form.

        Settings named in skip are neither checked nor parsed; their value
        in the result is None.
        """
        skip = set(skip)
        invalid = []
        timeout = batch_size = batch_delay = model_id = None

        if 'LLM_TIMEOUT_SECONDS' not in skip:
            try:
                timeout = float(cls.LLM_TIMEOUT_SECONDS)
                if timeout <= 0:
                    invalid.append('LLM_TIMEOUT_SECONDS')
            except (TypeError, ValueError):
                invalid.append('LLM_TIMEOUT_SECONDS')

        if 'LLM_BATCH_SIZE' not in skip:
            try:
                batch_size = int(cls.LLM_BATCH_SIZE)
                if batch_size < 1:
                    invalid.append('LLM_BATCH_SIZE')
            except (TypeError, ValueError):
                invalid.append('LLM_BATCH_SIZE')

        if 'LLM_BATCH_DELAY_SECONDS' not in skip:
            try:
                batch_delay = float(cls.LLM_BATCH_DELAY_SECONDS)
                if batch_delay < 0:
                    invalid.append('LLM_BATCH_DELAY_SECONDS')
            except (TypeError, ValueError):
                invalid.append('LLM_BATCH_DELAY_SECONDS')

        if 'LLM_MODEL_ID' not in skip:
            if not cls.LLM_MODEL_ID or not cls.LLM_MODEL_ID.strip():
                invalid.append('LLM_MODEL_ID')
            else:
                model_id = cls.LLM_MODEL_ID.strip()

        if invalid:
            raise ValueError(f"Invalid configuration settings: {', '.join(invalid)}")

        return {
            'remote_enabled': bool(cls.HUGGINGFACE_API_KEY),
            'provider': cls.LLM_PROVIDER,
            'model_id': model_id,
            'timeout': timeout,
            'batch_size': batch_size,
            'batch_delay': batch_delay,
            'log_level': cls.LOG_LEVEL,
        }
