"""
routes/tts.py — TTS API Blueprint

GET  /api/providers            — configured providers + tunable parameter schema
GET  /api/voices?provider=<n>  — voices from one provider, or all configured
POST /api/synthesize           — synthesize text, respond with the audio body

The TTSService instance lives in current_app.extensions['tts_service'].
"""

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from providers.tts.base import AudioFormat, ProviderName, SynthesizeOptions

logger = logging.getLogger(__name__)

tts_bp = Blueprint('tts', __name__)

# Descriptive UI metadata only; values are not validated server-side.
PROVIDER_PARAMETERS = {
    ProviderName.ELEVENLABS: [
        {'name': 'stability', 'label': 'Stability', 'type': 'range',
         'min': 0, 'max': 1, 'step': 0.01, 'default': 0.5},
        {'name': 'similarityBoost', 'label': 'Similarity Boost', 'type': 'range',
         'min': 0, 'max': 1, 'step': 0.01, 'default': 0.75},
        {'name': 'style', 'label': 'Style', 'type': 'range',
         'min': 0, 'max': 1, 'step': 0.01, 'default': 0},
    ],
    ProviderName.VARCO: [
        {'name': 'speed', 'label': 'Speed', 'type': 'range',
         'min': 0.5, 'max': 2, 'step': 0.1, 'default': 1.0},
        {'name': 'pitch', 'label': 'Pitch', 'type': 'range',
         'min': -20, 'max': 20, 'step': 1, 'default': 0},
    ],
}


def _service():
    return current_app.extensions['tts_service']


@tts_bp.get('/api/providers')
def get_providers():
    try:
        service = _service()
        default = service.get_default_provider()
        providers = [
            {
                'name': name.value,
                'isDefault': name.value == default,
                'parameters': PROVIDER_PARAMETERS.get(name, []),
            }
            for name in service.get_configured_providers()
        ]
        return jsonify({'providers': providers, 'default': default})
    except Exception as e:
        logger.error('Listing providers failed: %s', e)
        return jsonify({'error': str(e)}), 500


@tts_bp.get('/api/voices')
def get_voices():
    try:
        provider = request.args.get('provider') or None
        voices = _service().list_voices(provider)
        return jsonify({'voices': [v.to_dict() for v in voices]})
    except Exception as e:
        logger.error('Listing voices failed: %s', e)
        return jsonify({'error': str(e)}), 500


@tts_bp.post('/api/synthesize')
def synthesize():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    text = data.get('text')
    voice_id = data.get('voiceId')
    if not text or not voice_id:
        return jsonify({'error': 'Text and voiceId are required'}), 400

    requested_format = data.get('format') or AudioFormat.MP3.value
    try:
        options = SynthesizeOptions(
            voice_id=voice_id,
            format=AudioFormat(requested_format),
            stability=data.get('stability'),
            similarity_boost=data.get('similarityBoost'),
            style=data.get('style'),
            speed=data.get('speed'),
            pitch=data.get('pitch'),
        )
        result = _service().synthesize(text, options, provider=data.get('provider') or None)
    except Exception as e:
        logger.error('Synthesis failed: %s', e)
        return jsonify({'error': str(e)}), 500

    content_type = 'audio/wav' if requested_format == 'wav' else 'audio/mpeg'
    return Response(
        result.audio,
        mimetype=content_type,
        headers={'Content-Disposition': f'attachment; filename="tts_output.{requested_format}"'},
    )
