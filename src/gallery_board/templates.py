# ----------------------------
# Templates (rendered with render_template_string)
# ----------------------------
BASE = r"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ header_title or "Gallery" }}</title>
  <link href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.0/css/all.min.css" rel="stylesheet">
  <style>
    :root{
      --gap: 1rem; --radius: 10px; --btn-radius: 6px; --muted:#6b7280; --brand:#2b6cb0; --danger:#ef4444;
      --bg:#f5f7fb; --text:#0f172a; --card-bg:#ffffff; --border:#e5e7eb; --hover:#f3f4f6;
      --overlay: rgba(15, 23, 42, .55);
    }
    *{ box-sizing: border-box; } html, body { height: 100%; }
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; background:var(--bg); color:var(--text); margin:0; }
    .container { padding:1rem; max-width: min(1400px, 98vw); margin: 0 auto; }
    .header { display:flex; justify-content:space-between; align-items:center; gap:1rem; margin-bottom:1rem; flex-wrap:wrap; }
    .header h1 { margin:0; font-size:1.6rem; }
    .header-buttons { display:flex; gap:.5rem; }
    .flash { padding:0.45rem 0.7rem; border-radius:var(--btn-radius); margin: 0 0 0.6rem 0; }
    .flash.success { background:#e8fff2; color:#155d2e; } .flash.info { background:#eef2ff; color:#1e3a8a; } .flash.danger { background:#fff1f2; color:#991b1b; }

    .btn { display:inline-flex; align-items:center; gap:0.35rem; background:var(--brand); color:#fff; text-decoration:none; border:1px solid transparent; padding:0.4rem 0.7rem; border-radius:var(--btn-radius); cursor:pointer; font-size:0.9rem; }
    .btn.outline { background:transparent; color:var(--brand); border-color:var(--brand); }
    .btn.ghost { background:var(--hover); color:inherit; }
    .btn.danger { background:var(--danger); }

    .grid-container { display:grid; gap:var(--gap); grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); }
    .card { background:var(--card-bg); border:1px solid var(--border); border-radius:var(--radius); overflow:hidden; box-shadow:0 1px 6px rgba(0,0,0,.06); display:flex; flex-direction:column; }
    .card.sortable-ghost { opacity:.5; }
    .card-image-container { position:relative; aspect-ratio: 4 / 3; background:#e5e7eb; }
    .card-img { width:100%; height:100%; object-fit:cover; display:block; }
    .drag-handle { position:absolute; top:.4rem; left:.4rem; padding:.3rem .4rem; border-radius:6px; background:rgba(0,0,0,.45); color:#fff; cursor:grab; touch-action:none; }
    .edit-overlay { position:absolute; inset:auto .4rem .4rem auto; display:flex; gap:.35rem; opacity:0; transition:opacity .15s; }
    .card:hover .edit-overlay, .card:focus-within .edit-overlay { opacity:1; }
    .btn-overlay { border:0; border-radius:6px; padding:.3rem .5rem; background:rgba(0,0,0,.55); color:#fff; cursor:pointer; text-decoration:none; font-size:.85rem; display:inline-flex; align-items:center; gap:.3rem; }
    .card-content { display:flex; align-items:center; justify-content:space-between; gap:.5rem; padding:.55rem .7rem; }
    .card-title { font-weight:700; overflow:hidden; text-overflow:ellipsis; white-space:nowrap; min-width:0; }
    .empty-state { text-align:center; padding:3rem 1rem; color:var(--muted); border:2px dashed var(--border); border-radius:var(--radius); }

    /* Modal */
    .modal { display:none; position:fixed; inset:0; z-index:1000; background:var(--overlay); align-items:center; justify-content:center; padding:1rem; }
    .modal.show { display:flex; }
    .modal-box { background:var(--card-bg); color:var(--text); width:min(760px, 96vw); border-radius:10px; border:1px solid var(--border); box-shadow:0 15px 60px rgba(0,0,0,.25); max-height:90vh; display:flex; flex-direction:column; }
    .modal-head { padding:.8rem 1rem; border-bottom:1px solid var(--border); }
    .modal-head h2 { margin:0; font-size:1.1rem; }
    .modal-body { padding:1rem; overflow:auto; display:grid; grid-template-columns: 1fr 1fr; gap:1rem; }
    .modal-foot { display:flex; justify-content:flex-end; gap:.5rem; padding:.8rem 1rem; border-top:1px solid var(--border); }
    .modal label { display:block; margin:.4rem 0 .2rem; font-weight:600; }
    .modal input[type="text"], .modal input[type="url"] { width:100%; padding:.45rem .55rem; border-radius:6px; border:1px solid var(--border); background:var(--card-bg); color:inherit; }
    .error-banner { display:none; margin:.8rem 1rem 0; padding:.45rem .7rem; border-radius:6px; background:#fff1f2; color:#991b1b; }
    .error-banner.show { display:block; }
    .preview-box { aspect-ratio: 4 / 3; border:1px dashed var(--border); border-radius:8px; display:flex; align-items:center; justify-content:center; overflow:hidden; color:var(--muted); }
    .preview-box img { width:100%; height:100%; object-fit:cover; }
    @media (max-width: 640px){ .modal-body { grid-template-columns: 1fr; } }
  </style>
  <script src="https://cdn.jsdelivr.net/npm/sortablejs@1.15.2/Sortable.min.js"></script>
</head>
<body>
  <div class="container">
    {% with messages = get_flashed_messages(with_categories=true) %}
      {% for category,msg in messages %}
        <div class="flash {{ category }}">{{ msg }}</div>
      {% endfor %}
    {% endwith %}

    {{ content }}
  </div>

  <!-- MODAL -->
  <div id="modal" class="modal" aria-hidden="true">
    <div class="modal-box" role="dialog" aria-labelledby="modalTitle">
      <div class="modal-head"><h2 id="modalTitle">Add New Image</h2></div>
      <div id="errorBanner" class="error-banner"></div>
      <div class="modal-body">
        <div>
          <label for="titleInput">Title</label>
          <input id="titleInput" type="text" placeholder="Title" autocomplete="off">
          <label for="urlInput">Image URL</label>
          <input id="urlInput" type="url" placeholder="https://..." autocomplete="off">
        </div>
        <div>
          <label>Preview</label>
          <div class="preview-box" id="previewBox"><span>No Image</span></div>
        </div>
      </div>
      <div class="modal-foot">
        <button class="btn ghost" type="button" id="modalCancel">Cancel</button>
        <button class="btn" type="button" id="modalSave"><i class="fa-solid fa-floppy-disk"></i> Save</button>
      </div>
    </div>
  </div>

  <script>
  const JSON_HEADERS = {'Accept':'application/json','X-Requested-With':'fetch'};

  async function postForm(url, data){
    const fd = new FormData();
    Object.entries(data || {}).forEach(([k,v]) => fd.append(k, v));
    const rsp = await fetch(url, {method:'POST', body: fd, credentials:'same-origin', headers: JSON_HEADERS});
    let body = {};
    try{ body = await rsp.json(); }catch(e){}
    return {status: rsp.status, body};
  }

  // ====== Editor modal ======
  const modal = document.getElementById('modal');
  const modalTitle = document.getElementById('modalTitle');
  const titleInput = document.getElementById('titleInput');
  const urlInput = document.getElementById('urlInput');
  const errorBanner = document.getElementById('errorBanner');
  const previewBox = document.getElementById('previewBox');
  let editingId = null;

  function showError(msg){
    errorBanner.textContent = msg || '';
    errorBanner.classList.toggle('show', !!msg);
  }
  function renderPreview(){
    const url = urlInput.value.trim();
    previewBox.innerHTML = '';
    if(!url){ previewBox.innerHTML = '<span>No Image</span>'; return; }
    const img = document.createElement('img');
    img.alt = 'Preview';
    img.src = url;
    img.onerror = () => { img.style.display = 'none'; };
    previewBox.appendChild(img);
  }
  function openModal(item){
    editingId = item ? item.id : null;
    modalTitle.textContent = item ? 'Edit Image' : 'Add New Image';
    titleInput.value = item ? item.title : '';
    urlInput.value = item ? item.url : '';
    showError('');
    renderPreview();
    modal.classList.add('show');
    modal.setAttribute('aria-hidden', 'false');
    titleInput.focus();
  }
  function closeModal(){
    modal.classList.remove('show');
    modal.setAttribute('aria-hidden', 'true');
    editingId = null;
  }
  urlInput.addEventListener('input', renderPreview);
  document.getElementById('modalCancel').addEventListener('click', closeModal);
  modal.addEventListener('click', (e) => { if(e.target === modal) closeModal(); });
  document.addEventListener('keydown', (e) => { if(e.key === 'Escape' && modal.classList.contains('show')) closeModal(); });

  document.getElementById('modalSave').addEventListener('click', async () => {
    const action = editingId ? `/items/${encodeURIComponent(editingId)}/edit` : '{{ url_for("gallery.add_item") }}';
    const {status, body} = await postForm(action, {title: titleInput.value, url: urlInput.value});
    if(body.ok){ location.reload(); return; }
    if(status === 404){ closeModal(); location.reload(); return; }
    showError(body.error || 'Could not save.');
  });

  document.addEventListener('click', async (e) => {
    const addBtn = e.target.closest('[data-action="add"]');
    if(addBtn){ openModal(null); return; }

    const editBtn = e.target.closest('[data-action="edit"]');
    if(editBtn){
      const card = editBtn.closest('.card');
      openModal({id: card.dataset.id, title: card.dataset.title, url: card.dataset.url});
      return;
    }

    const delBtn = e.target.closest('[data-action="delete"]');
    if(delBtn){
      const card = delBtn.closest('.card');
      if(!window.confirm('Delete this image?')) return;
      await postForm(`/items/${encodeURIComponent(card.dataset.id)}/delete`, {confirm: 'yes'});
      location.reload();
      return;
    }

    const titleBtn = e.target.closest('[data-action="edit-title"]');
    if(titleBtn){
      const answer = window.prompt('Enter new Page Title:', {{ header_title|tojson }});
      if(answer === null || !answer.trim()) return;
      await postForm('{{ url_for("gallery.rename_title") }}', {title: answer});
      location.reload();
    }
  });

  // ====== Drag & drop (handle only) ======
  const grid = document.getElementById('grid');
  if(grid){
    new Sortable(grid, {
      handle: '.drag-handle', draggable: '.card', animation: 150,
      delay: 100, delayOnTouchOnly: true, touchStartThreshold: 5, fallbackTolerance: 5,
      onEnd: async (evt) => {
        if(evt.oldIndex === evt.newIndex) return;
        const rsp = await fetch('{{ url_for("gallery.reorder") }}', {
          method: 'POST', credentials: 'same-origin',
          headers: {'Content-Type': 'application/json', ...JSON_HEADERS},
          body: JSON.stringify({active: evt.item.dataset.id, from: evt.oldIndex, to: evt.newIndex})
        });
        if(!rsp.ok) location.reload();
      }
    });
  }
  </script>
</body>
</html>
"""

INDEX = r"""
<div class="header">
  <h1>{{ header_title }}</h1>
  <div class="header-buttons">
    <button class="btn outline" type="button" data-action="edit-title"><i class="fa-solid fa-pen"></i> Edit Title</button>
    <button class="btn" type="button" data-action="add"><i class="fa-solid fa-plus"></i> Add Image</button>
  </div>
</div>

{% if not items %}
  <div class="empty-state">
    <h3>No images found</h3>
    <p>Click "Add Image" to create your first card.</p>
  </div>
{% else %}
  <div class="grid-container" id="grid">
    {% for it in items %}
      <div class="card" data-id="{{ it.id }}" data-title="{{ it.title }}" data-url="{{ it.image_url }}">
        <div class="card-image-container">
          <img class="card-img" src="{{ it.image_url }}" alt="{{ it.title }}"
               onerror="this.onerror=null; this.src='{{ placeholder_url }}';">
          <span class="drag-handle" title="Drag to reorder"><i class="fa-solid fa-grip-vertical"></i></span>
          <div class="edit-overlay">
            {% if it.image_url is safe_url %}
            <a class="btn-overlay" href="{{ it.image_url }}" target="_blank" rel="noopener" title="Open Image"><i class="fa-solid fa-up-right-from-square"></i></a>
            {% endif %}
            <button class="btn-overlay" type="button" data-action="edit"><i class="fa-solid fa-pen"></i> Edit</button>
          </div>
        </div>
        <div class="card-content">
          <div class="card-title" title="{{ it.title }}">{{ it.title }}</div>
          <button class="btn danger" type="button" data-action="delete"><i class="fa-solid fa-trash"></i> Delete</button>
        </div>
      </div>
    {% endfor %}
  </div>
{% endif %}
"""

PLACEHOLDER_URL = "https://via.placeholder.com/300?text=Image+Error"
