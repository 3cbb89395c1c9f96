"""
Profile Image Service
Renders the animal and brain profile percentages onto their template images.

Install dependencies:
pip install -e .

Run locally:
python app.py

Deploy with Procfile:
web: gunicorn app:app
"""

from concurrent.futures import ThreadPoolExecutor
import os
import traceback

from flask import Flask, request, jsonify

from profile_images import generate_animal_image, generate_brain_image

# ---------- CONFIG ----------

BASE_IMAGE_BRAIN_URL = os.environ.get(
    "BASE_IMAGE_BRAIN_URL", "https://i.postimg.cc/LXMYjwtX/Inserir-um-t-tulo-6.png"
)
BASE_IMAGE_ANIMALS_URL = os.environ.get(
    "BASE_IMAGE_ANIMALS_URL", "https://i.postimg.cc/0N1sjN2W/Inserir-um-t-tulo-7.png"
)

MISSING_DATA_MESSAGE = 'Request body must contain "animalData" and "brainData" objects.'


class ValidationError(Exception):
    """Raised when the request body is missing a required dataset."""


def parse_payload(data):
    """Return the (animalData, brainData) pair or raise ValidationError."""
    if not isinstance(data, dict):
        raise ValidationError(MISSING_DATA_MESSAGE)

    animal_data = data.get('animalData')
    brain_data = data.get('brainData')
    # An empty object still counts as present
    if not isinstance(animal_data, dict) or not isinstance(brain_data, dict):
        raise ValidationError(MISSING_DATA_MESSAGE)

    return animal_data, brain_data


def generate_images(animal_data, brain_data):
    """Render both profiles in parallel; the first failure propagates."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        animal_future = executor.submit(generate_animal_image, BASE_IMAGE_ANIMALS_URL, animal_data)
        brain_future = executor.submit(generate_brain_image, BASE_IMAGE_BRAIN_URL, brain_data)
        return animal_future.result(), brain_future.result()


app = Flask(__name__)

@app.after_request
def after_request(response):
    response.headers.add('Access-Control-Allow-Origin', '*')
    response.headers.add('Access-Control-Allow-Headers', 'Content-Type,Authorization')
    response.headers.add('Access-Control-Allow-Methods', 'POST')
    return response

@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({'error': 'Method Not Allowed'}), 405

@app.route('/health', methods=['GET'])
def health():
    return jsonify({
        'status': 'healthy',
        'service': 'profile-images',
        'templates': {
            'animal': BASE_IMAGE_ANIMALS_URL,
            'brain': BASE_IMAGE_BRAIN_URL,
        }
    })

@app.route('/generate-images', methods=['POST'], provide_automatic_options=False)
def generate_images_endpoint():
    """Render the animal and brain profile images for one result."""
    try:
        animal_data, brain_data = parse_payload(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    try:
        print("[Images] Generating profile images")
        animal_image, brain_image = generate_images(animal_data, brain_data)
        return jsonify({
            'animalImage': animal_image,
            'brainImage': brain_image,
        })
    except Exception as e:
        print(f"[Images] Image generation failed: {str(e)}")
        traceback.print_exc()
        return jsonify({'error': 'Failed to generate images.', 'details': str(e)}), 500


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
