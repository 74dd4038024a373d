from .sound_cue_recorder import SoundCueRecorder

__all__ = ['SoundCueRecorder']
