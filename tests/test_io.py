"""Tests for image I/O and seam visualization."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from PIL import Image
from seam_carving.buffer import PixelBuffer
from seam_carving.carving import CarvingLoop
from seam_carving.errors import ImageIOError
from seam_carving.io import load_image, save_image, to_pil
from seam_carving.overlay import SeamRecorder, overlay_seam

from conftest import make_random_image, make_uniform_image


class TestImageIO:
    def test_png_roundtrip(self, tmp_path):
        image = make_random_image(6, 9, seed=8)
        path = tmp_path / "out" / "image.png"
        save_image(image, path)
        loaded = load_image(path)
        assert loaded.dtype == torch.uint8
        assert torch.equal(loaded, image)

    def test_grayscale_file_loads_as_rgb(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new('L', (5, 4), color=77).save(path)
        loaded = load_image(path)
        assert loaded.shape == (3, 4, 5)
        assert (loaded == 77).all()

    def test_to_pil_size(self):
        img = to_pil(make_random_image(4, 7))
        assert img.size == (7, 4)
        assert img.mode == 'RGB'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageIOError):
            load_image(tmp_path / "nope.png")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(ImageIOError):
            load_image(path)

    def test_unknown_extension(self, tmp_path):
        with pytest.raises(ImageIOError):
            save_image(make_random_image(2, 2), tmp_path / "image.unknownformat")


class TestOverlaySeam:
    def test_paints_seam_and_neighbors(self):
        image = make_uniform_image(3, 5, color=(0, 0, 0))
        painted = overlay_seam(image, torch.tensor([0, 2, 4]), 'vertical')

        red = painted[0]
        assert red[0].tolist() == [255, 255, 0, 0, 0]
        assert red[1].tolist() == [0, 255, 255, 255, 0]
        assert red[2].tolist() == [0, 0, 0, 255, 255]
        assert (painted[1] == 0).all() and (painted[2] == 0).all()

    def test_horizontal(self):
        image = make_uniform_image(4, 2, color=(0, 0, 0))
        painted = overlay_seam(image, torch.tensor([0, 3]), 'horizontal', color=(0, 9, 0))
        assert painted[1, :, 0].tolist() == [9, 9, 0, 0]
        assert painted[1, :, 1].tolist() == [0, 0, 9, 9]

    def test_does_not_modify_input(self):
        buffer = PixelBuffer(make_uniform_image(3, 3, color=(1, 1, 1)))
        overlay_seam(buffer, torch.tensor([1, 1, 1]))
        assert (buffer.view() == 1).all()

    def test_out_of_range_index_skipped(self):
        image = make_uniform_image(2, 3, color=(0, 0, 0))
        painted = overlay_seam(image, torch.tensor([7, 1]))
        assert (painted[:, 0] == 0).all()
        assert painted[0, 1].tolist() == [255, 255, 255]

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            overlay_seam(make_random_image(2, 2), torch.tensor([0, 0]), 'up')


class TestSeamRecorder:
    def test_one_frame_per_seam(self, config):
        recorder = SeamRecorder()
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 7, 6, config=config, observer=recorder).run()
        recorder.add_final(buffer)

        assert len(recorder.frames) == 3 + 2 + 1
        assert all(frame.size == (10, 8) for frame in recorder.frames)

    def test_include_carved_adds_frame_after_each_removal(self, config):
        recorder = SeamRecorder(include_carved=True)
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 7, 6, config=config, observer=recorder,
                    after_removal=recorder.after_removal).run()
        recorder.add_final(buffer)

        assert len(recorder.frames) == 2 * (3 + 2) + 1
        assert all(frame.size == (10, 8) for frame in recorder.frames)
        # The frame after the last removal matches the finished image
        assert recorder.frames[-2].tobytes() == recorder.frames[-1].tobytes()

    def test_carved_frames_off_by_default(self, config):
        recorder = SeamRecorder()
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 8, 8, config=config, observer=recorder,
                    after_removal=recorder.after_removal).run()
        assert len(recorder.frames) == 2

    def test_carved_frames_follow_every_n(self, config):
        recorder = SeamRecorder(every=2, include_carved=True)
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 5, 8, config=config, observer=recorder,
                    after_removal=recorder.after_removal).run()
        assert len(recorder.frames) == 2 * 3

    def test_every_n(self, config):
        recorder = SeamRecorder(every=2)
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 5, 8, config=config, observer=recorder).run()
        assert len(recorder.frames) == 3

    def test_save_gif(self, tmp_path, config):
        recorder = SeamRecorder()
        buffer = PixelBuffer(make_random_image(8, 10))
        CarvingLoop(buffer, 8, 8, config=config, observer=recorder).run()
        path = tmp_path / "seams.gif"
        recorder.save_gif(path, fps=5)
        with Image.open(path) as gif:
            assert gif.format == 'GIF'
            assert gif.size == (10, 8)

    def test_save_without_frames(self, tmp_path):
        with pytest.raises(ValueError):
            SeamRecorder().save_gif(tmp_path / "empty.gif")

    def test_bad_every(self):
        with pytest.raises(ValueError):
            SeamRecorder(every=0)
