from audio_equalizer.main import run

run()
