"""
HTTP bridge for the Manchester decoder.

POST /py-bridge/decode
    JSON body  {"samples": [..], "invert": false, "clock": null}
    or a multipart upload with a `wav` file field (plus optional
    `invert`, `clock` and `channel` form fields).
    Returns    {"success": bool, "bits": [..], "bit_string": "0101..", "count": n}

GET /py-bridge/health
    Returns    {"status": "ok"}

Run:  python -m RMDE.SVM.bridge_server   (localhost:5000)
"""
import os
import tempfile

import numpy as np
from flask import Flask, request, jsonify

from RMDE.SOM.console_log import set_file_logging
from RMDE.SOM.presenter import format_bits
from RMDE.SVM.manchester_decoder import decode
from RMDE.SVM.reader_sim import load_trace

SAMPLE_MAX = int(np.iinfo(np.int64).max)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_clock(value):
    """Clock from a JSON int or a decimal form string; floats and bools are rejected."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(f"`clock` must be a whole number of samples, got {value!r}")
        return int(text)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"`clock` must be a whole number of samples, got {value!r}")
    return value


def _is_sample(value) -> bool:
    # unsigned amplitudes that fit the decoder's int64 buffer
    return type(value) is int and 0 <= value <= SAMPLE_MAX


def create_app() -> Flask:
    app = Flask(__name__)

    @app.route('/py-bridge/decode', methods=['POST'])
    def decode_trace():
        try:
            if 'wav' in request.files:
                f = request.files['wav']
                invert = _parse_bool(request.form.get('invert', False))
                clock = _parse_clock(request.form.get('clock'))
                channel = int(request.form.get('channel', 0))
                with tempfile.TemporaryDirectory() as td:
                    in_path = os.path.join(td, 'input.wav')
                    f.save(in_path)
                    samples = load_trace(in_path, channel)
            else:
                body = request.get_json(silent=True)
                if not isinstance(body, dict) or 'samples' not in body:
                    return jsonify({'error': 'expected JSON {"samples": [...]} or file field `wav`'}), 400
                samples = body['samples']
                if not isinstance(samples, list) or not all(_is_sample(s) for s in samples):
                    return jsonify({'error': '`samples` must be a list of non-negative 64-bit integers'}), 400
                invert = _parse_bool(body.get('invert', False))
                clock = _parse_clock(body.get('clock'))
        except (ValueError, TypeError, RuntimeError) as e:
            return jsonify({'error': str(e)}), 400

        result = decode(samples, polarity_invert=invert, clock=clock)
        return jsonify({
            'success': result.success,
            'bits': result.bits,
            'bit_string': format_bits(result.bits, len(result.bits)),
            'count': len(result.bits),
        })

    @app.route('/py-bridge/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    return app


def main() -> None:
    # the bridge reports over HTTP; keep decoder chatter on the console only
    set_file_logging(False)
    app = create_app()
    app.run(host='127.0.0.1', port=5000)


if __name__ == '__main__':
    main()
