"""Single-page control UI served at ``/``."""

INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Audio Equalizer</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
    .panel { margin-bottom: 30px; padding: 20px; border: 1px solid #ddd; border-radius: 5px; }
    .slider-container { margin: 15px 0; }
    .slider { width: 100%; }
    .audio-player { margin-top: 20px; width: 100%; }
    .audio-player audio { width: 100%; }
    .button { padding: 10px 15px; background: #007bff; color: white; border: none; border-radius: 4px; cursor: pointer; }
    .button:hover { background: #0056b3; }
    .note { color: #666; font-size: 0.9em; }
  </style>
</head>
<body>
  <h1>Audio Equalizer</h1>

  <div class="panel">
    <h2>Upload Audio File</h2>
    <form action="/upload" method="post" enctype="multipart/form-data">
      <input type="file" name="audioFile" accept=".wav,audio/wav" required>
      <button type="submit" class="button">Upload</button>
    </form>
  </div>

  <div class="panel">
    <h2>Equalizer Controls</h2>
    <p class="note">Each slider scales the whole signal; the three gains are averaged.</p>
    <form action="/process" method="post">
      <div class="slider-container">
        <label for="bass">Bass:</label>
        <input type="range" id="bass" name="bass" min="0" max="200" value="100" class="slider">
        <span id="bassValue">100%</span>
      </div>
      <div class="slider-container">
        <label for="mid">Mid:</label>
        <input type="range" id="mid" name="mid" min="0" max="200" value="100" class="slider">
        <span id="midValue">100%</span>
      </div>
      <div class="slider-container">
        <label for="treble">Treble:</label>
        <input type="range" id="treble" name="treble" min="0" max="200" value="100" class="slider">
        <span id="trebleValue">100%</span>
      </div>
      <input type="hidden" id="filename" name="filename" value="">
      <button type="submit" class="button">Apply Equalization</button>
    </form>

    <div id="audioPlayer" class="audio-player"></div>
  </div>

  <script>
    ['bass', 'mid', 'treble'].forEach(function (band) {
      var slider = document.getElementById(band);
      slider.addEventListener('input', function () {
        document.getElementById(band + 'Value').textContent = this.value + '%';
      });
    });

    var params = new URLSearchParams(window.location.search);
    var file = params.get('file');
    if (file) {
      document.getElementById('filename').value = file;
      var container = document.getElementById('audioPlayer');

      var original = document.createElement('audio');
      original.controls = true;
      original.src = '/uploads/' + encodeURIComponent(file);
      container.appendChild(document.createTextNode('Original:'));
      container.appendChild(document.createElement('br'));
      container.appendChild(original);

      var label = document.createElement('div');
      label.textContent = 'Processed:';
      var processed = document.createElement('audio');
      processed.controls = true;
      processed.src = '/processed/processed_' + encodeURIComponent(file) + '?t=' + Date.now();
      processed.onerror = function () {
        label.remove();
        this.remove();
      };
      container.appendChild(label);
      container.appendChild(processed);
    }
  </script>
</body>
</html>
"""
