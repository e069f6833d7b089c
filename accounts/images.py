# accounts/images.py

import logging
import os
from io import BytesIO

from PIL import Image
from django.core.files.base import ContentFile

logger = logging.getLogger(__name__)

AVATAR_MAX_SIZE = (400, 400)


"""
Shrinks an uploaded image so it fits inside max_size and re-encodes it
as JPEG. Returns a ContentFile to store instead of the upload, or None
when the image is already small enough or could not be read. The file
pointer of 'image' is always left at the start.
"""
def optimize_image(image, max_size=AVATAR_MAX_SIZE):
    if hasattr(image, 'seek'):
        image.seek(0)

    try:
        img = Image.open(image)

        if img.height <= max_size[1] and img.width <= max_size[0]:
            return None

        # JPEG has no alpha channel
        if img.mode != 'RGB':
            img = img.convert('RGB')

        img.thumbnail(max_size, Image.Resampling.LANCZOS)
        output = BytesIO()
        img.save(output, format='JPEG', quality=75)
        output.seek(0)

        new_name = os.path.splitext(os.path.basename(image.name))[0] + '.jpg'
        return ContentFile(output.read(), name=new_name)
    except (OSError, ValueError) as e:
        logger.warning("Could not optimize image %s: %s", getattr(image, 'name', image), e)
        return None
    finally:
        if hasattr(image, 'seek'):
            image.seek(0)
