"""
Tests for the image request models
"""

import asyncio
import os
import sys
import tempfile
import unittest

import httpx

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from openai_images.exceptions import EncodingError, ValidationError
from openai_images.models.form_data import FileField, StringField
from openai_images.models.image_models import (
    CreateImageRequest,
    EditImageRequest,
    ImageAsset,
    ImageBackground,
    ImageFormat,
    ImageOutputFormat,
    ImageQuality,
    ImageSize,
    InputFidelity,
    ModerationLevel,
)
from multipart_helpers import parse_multipart


def make_image(name="image.png", data=b"\x89PNG", image_format=ImageFormat.PNG):
    return ImageAsset.from_bytes(name, data, image_format)


class TestImageFormat(unittest.TestCase):

    def test_content_types(self):
        self.assertEqual(ImageFormat.PNG.content_type, "image/png")
        self.assertEqual(ImageFormat.JPG.content_type, "image/jpeg")
        self.assertEqual(ImageFormat.WEBP.content_type, "image/webp")

    def test_from_suffix(self):
        self.assertEqual(ImageFormat.from_suffix(".JPEG"), ImageFormat.JPG)
        self.assertEqual(ImageFormat.from_suffix("webp"), ImageFormat.WEBP)
        self.assertIsNone(ImageFormat.from_suffix(".gif"))

    def test_from_content_type(self):
        self.assertEqual(ImageFormat.from_content_type("image/png; charset=binary"), ImageFormat.PNG)
        self.assertIsNone(ImageFormat.from_content_type("text/html"))
        self.assertIsNone(ImageFormat.from_content_type(None))


class TestImageAsset(unittest.TestCase):
    """Test the image source constructors"""

    def test_from_bytes(self):
        image = make_image("photo.jpg", b"\xff\xd8", ImageFormat.JPG)

        self.assertEqual(image.file_name, "photo.jpg")
        self.assertEqual(image.data, b"\xff\xd8")
        self.assertEqual(image.content_type, "image/jpeg")

    def test_from_path_infers_name_and_format(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sunset.webp")
            with open(path, "wb") as f:
                f.write(b"RIFF....WEBP")

            image = ImageAsset.from_path(path)

        self.assertEqual(image.file_name, "sunset.webp")
        self.assertEqual(image.format, ImageFormat.WEBP)
        self.assertEqual(image.data, b"RIFF....WEBP")

    def test_from_path_missing_file(self):
        """Test that an unreadable source fails at construction time"""
        with self.assertRaises(EncodingError):
            ImageAsset.from_path("/nonexistent/dir/image.png")

    def test_from_path_unknown_suffix(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "image.gif")
            with open(path, "wb") as f:
                f.write(b"GIF89a")

            with self.assertRaises(EncodingError):
                ImageAsset.from_path(path)

            image = ImageAsset.from_path(path, file_name="renamed.png", format=ImageFormat.PNG)
            self.assertEqual(image.file_name, "renamed.png")

    def test_from_url_downloads_image(self):
        def handler(request):
            return httpx.Response(200, content=b"jpegbytes", headers={"content-type": "image/jpeg"})

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await ImageAsset.from_url("https://example.com/pics/dog.jpg", client=client)

        image = asyncio.run(run())

        self.assertEqual(image.file_name, "dog.jpg")
        self.assertEqual(image.format, ImageFormat.JPG)
        self.assertEqual(image.data, b"jpegbytes")

    def test_from_url_without_path_uses_placeholder_name(self):
        def handler(request):
            return httpx.Response(200, content=b"png", headers={"content-type": "image/png"})

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await ImageAsset.from_url("https://example.com/", client=client)

        image = asyncio.run(run())
        self.assertEqual(image.file_name, "unknown_file")

    def test_from_url_http_error(self):
        def handler(request):
            return httpx.Response(404)

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await ImageAsset.from_url("https://example.com/missing.png", client=client)

        with self.assertRaises(EncodingError):
            asyncio.run(run())

    def test_from_url_file_scheme(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "local.png")
            with open(path, "wb") as f:
                f.write(b"local")

            image = asyncio.run(ImageAsset.from_url("file://" + path))

        self.assertEqual(image.file_name, "local.png")
        self.assertEqual(image.data, b"local")

    def test_from_url_unsupported_scheme(self):
        with self.assertRaises(EncodingError):
            asyncio.run(ImageAsset.from_url("ftp://example.com/a.png"))

    def test_invalid_construction_raises_encoding_error(self):
        """Test that bad field values and unknown fields name the offending field"""
        with self.assertRaises(EncodingError) as ctx:
            ImageAsset(file_name="a.png", data=123, format=ImageFormat.PNG)
        self.assertEqual(ctx.exception.field, "data")

        with self.assertRaises(EncodingError) as ctx:
            ImageAsset(file_name="a.png", data=b"A", format=ImageFormat.PNG, colour="red")
        self.assertEqual(ctx.exception.field, "colour")


class TestCreateImageRequest(unittest.TestCase):
    """Test JSON rendering of create requests"""

    def test_unset_fields_omitted(self):
        request = CreateImageRequest(prompt="a red fox")

        self.assertEqual(request.to_wire_form(), {"prompt": "a red fox", "model": "gpt-image-1"})

    def test_all_fields_rendered(self):
        request = CreateImageRequest(
            prompt="a red fox",
            background=ImageBackground.TRANSPARENT,
            moderation=ModerationLevel.LOW,
            n=2,
            output_compression=80,
            output_format=ImageOutputFormat.WEBP,
            partial_images=1,
            quality=ImageQuality.HIGH,
            size=ImageSize.LANDSCAPE,
            stream=False,
            user="user-123",
        )

        self.assertEqual(request.to_wire_form(), {
            "prompt": "a red fox",
            "model": "gpt-image-1",
            "background": "transparent",
            "n": 2,
            "output_compression": 80,
            "output_format": "webp",
            "partial_images": 1,
            "quality": "high",
            "size": "1536x1024",
            "stream": False,
            "user": "user-123",
            "moderation": "low",
        })

    def test_validation(self):
        """Test that out-of-range parameters name the offending field"""
        cases = [
            ({"n": 0}, "n"),
            ({"n": 11}, "n"),
            ({"partial_images": 4}, "partial_images"),
            ({"partial_images": -1}, "partial_images"),
            ({"output_compression": 101}, "output_compression"),
            ({"prompt": ""}, "prompt"),
            ({"prompt": "x" * 32001}, "prompt"),
        ]
        for params, field in cases:
            with self.subTest(params=params):
                fields = {"prompt": "a red fox"}
                fields.update(params)
                with self.assertRaises(ValidationError) as ctx:
                    CreateImageRequest(**fields).to_wire_form()
                self.assertEqual(ctx.exception.field, field)

    def test_boundaries_accepted(self):
        for n in (1, 10):
            CreateImageRequest(prompt="x", n=n, partial_images=3, output_compression=0).validate_parameters()

    def test_direct_construction_raises_validation_error(self):
        """Test that type errors at construction are reported as the library ValidationError"""
        cases = [
            ({"n": 2.5}, "n"),
            ({"size": "800x600"}, "size"),
            ({"quality": "ultra"}, "quality"),
            ({"prompt": None}, "prompt"),
        ]
        for params, field in cases:
            with self.subTest(params=params):
                fields = {"prompt": "a red fox"}
                fields.update(params)
                with self.assertRaises(ValidationError) as ctx:
                    CreateImageRequest(**fields)
                self.assertEqual(ctx.exception.field, field)

    def test_bool_not_accepted_as_integer(self):
        for field in ("n", "partial_images", "output_compression"):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError) as ctx:
                    CreateImageRequest(prompt="a red fox", **{field: True})
                self.assertEqual(ctx.exception.field, field)

    def test_unknown_parameter_rejected(self):
        """Test that a misspelt parameter is an error rather than silently dropped"""
        with self.assertRaises(ValidationError) as ctx:
            CreateImageRequest(prompt="a red fox", qualty="high")
        self.assertEqual(ctx.exception.field, "qualty")

    def test_input_fidelity_is_edit_only(self):
        with self.assertRaises(ValidationError) as ctx:
            CreateImageRequest(prompt="a red fox", input_fidelity=InputFidelity.HIGH)
        self.assertEqual(ctx.exception.field, "input_fidelity")


class TestEditImageRequest(unittest.TestCase):
    """Test multipart rendering of edit requests"""

    def test_two_images_and_mask_order(self):
        """Test images first, then scalar fields, then the mask last"""
        request = EditImageRequest(
            images=[make_image("a.png", b"A"), make_image("b.jpg", b"B", ImageFormat.JPG)],
            prompt="add a hat",
            mask=make_image("mask.png", b"M"),
            n=2,
            size=ImageSize.SQUARE,
        )

        entries = request.to_wire_form()

        self.assertEqual(entries[0], FileField(name="image[]", file_name="a.png", data=b"A", content_type="image/png"))
        self.assertEqual(entries[1], FileField(name="image[]", file_name="b.jpg", data=b"B", content_type="image/jpeg"))
        self.assertEqual([e.name for e in entries[2:-1]], ["prompt", "n", "model", "size"])
        self.assertTrue(all(isinstance(e, StringField) for e in entries[2:-1]))
        self.assertEqual(entries[-1], FileField(name="mask", file_name="mask.png", data=b"M", content_type="image/png"))
        self.assertEqual(sum(1 for e in entries if isinstance(e, FileField) and e.name == "image[]"), 2)

    def test_full_scalar_order_and_rendering(self):
        request = EditImageRequest(
            images=[make_image()],
            prompt="p",
            n=3,
            user="u",
            stream=True,
            size=ImageSize.PORTRAIT,
            quality=ImageQuality.LOW,
            background=ImageBackground.OPAQUE,
            partial_images=0,
            output_format=ImageOutputFormat.JPEG,
            input_fidelity=InputFidelity.HIGH,
            output_compression=50,
        )

        scalars = [(e.name, e.value) for e in request.to_wire_form() if isinstance(e, StringField)]

        self.assertEqual(scalars, [
            ("prompt", "p"),
            ("n", "3"),
            ("model", "gpt-image-1"),
            ("user", "u"),
            ("stream", "true"),
            ("size", "1024x1536"),
            ("quality", "low"),
            ("background", "opaque"),
            ("partial_images", "0"),
            ("output_format", "jpeg"),
            ("input_fidelity", "high"),
            ("output_compression", "50"),
        ])

    def test_false_rendered_as_false(self):
        request = EditImageRequest(images=[make_image()], prompt="p", stream=False)
        values = {e.name: e.value for e in request.to_wire_form() if isinstance(e, StringField)}
        self.assertEqual(values["stream"], "false")

    def test_model_always_sent(self):
        request = EditImageRequest.for_image(make_image(), "p")
        names = [e.name for e in request.to_wire_form()]
        self.assertEqual(names, ["image[]", "prompt", "model"])

    def test_empty_images_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            EditImageRequest(images=[], prompt="p").to_wire_form()
        self.assertEqual(ctx.exception.field, "images")

    def test_n_out_of_range_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            EditImageRequest.for_image(make_image(), "p", n=42).to_wire_form()
        self.assertEqual(ctx.exception.field, "n")

    def test_to_multipart(self):
        request = EditImageRequest.for_image(make_image("x.png", b"X"), "p", user="u")
        multipart = request.to_multipart()

        parts = parse_multipart(multipart.body, multipart.boundary)
        self.assertEqual(parts, [
            ("image[]", "x.png", "image/png", b"X"),
            ("prompt", None, None, b"p"),
            ("model", None, None, b"gpt-image-1"),
            ("user", None, None, b"u"),
        ])

    def test_unknown_parameter_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            EditImageRequest.for_image(make_image(), "p", qualty="high")
        self.assertEqual(ctx.exception.field, "qualty")

    def test_moderation_is_create_only(self):
        with self.assertRaises(ValidationError) as ctx:
            EditImageRequest.for_image(make_image(), "p", moderation=ModerationLevel.LOW)
        self.assertEqual(ctx.exception.field, "moderation")

    def test_bad_image_reports_nested_field(self):
        with self.assertRaises(ValidationError) as ctx:
            EditImageRequest(images=["not an image"], prompt="p")
        self.assertTrue(ctx.exception.field.startswith("images"))

    def test_request_is_immutable(self):
        request = EditImageRequest.for_image(make_image(), "p")
        with self.assertRaises(Exception):
            request.prompt = "changed"


if __name__ == '__main__':
    unittest.main()
