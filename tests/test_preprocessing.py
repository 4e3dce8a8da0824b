import numpy as np
import pytest

from pytorchdemo.data import IMAGENET_MEAN, IMAGENET_STD, image_to_tensor_buffer, preprocess_image


def test_buffer_shape_and_dtype():
    image = np.zeros((120, 80, 3), dtype=np.uint8)
    buffer = image_to_tensor_buffer(image)
    assert buffer.shape == (3 * 224 * 224,)
    assert buffer.dtype == np.float32


def test_buffer_is_channel_major():
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    image[..., 0] = 255

    buffer = image_to_tensor_buffer(image, target_size=4).reshape(3, 4, 4)

    red = (1.0 - IMAGENET_MEAN[0]) / IMAGENET_STD[0]
    green = (0.0 - IMAGENET_MEAN[1]) / IMAGENET_STD[1]
    blue = (0.0 - IMAGENET_MEAN[2]) / IMAGENET_STD[2]
    assert np.allclose(buffer[0], red, atol=1e-5)
    assert np.allclose(buffer[1], green, atol=1e-5)
    assert np.allclose(buffer[2], blue, atol=1e-5)


def test_preprocess_without_normalization_scales_to_unit_range():
    image = np.full((5, 5, 3), 255, dtype=np.uint8)
    processed = preprocess_image(image, target_size=8, normalize=False)
    assert processed.shape == (8, 8, 3)
    assert np.allclose(processed, 1.0)


def test_rejects_grayscale():
    with pytest.raises(ValueError):
        preprocess_image(np.zeros((10, 10), dtype=np.uint8))
