"""Inline stylesheet and script embedded in every HTML report.

Both are plain strings (not templates) so that braces need no escaping.
"""

from __future__ import annotations

STYLES = """
    *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }

    :root {
      --bg-primary: #0f0f14;
      --bg-secondary: #16161e;
      --bg-card: #1c1c27;
      --bg-hover: #22222f;
      --border: #2a2a3a;
      --text-primary: #e4e4ef;
      --text-secondary: #8888a0;
      --text-muted: #55556a;
      --accent: #7c6af4;
      --accent-light: #9d8ff7;
      --green: #3dd68c;
      --green-bg: rgba(61, 214, 140, 0.1);
      --red: #f4556c;
      --red-bg: rgba(244, 85, 108, 0.1);
      --yellow: #f4c542;
      --yellow-bg: rgba(244, 197, 66, 0.1);
      --blue: #56b4f9;
      --blue-bg: rgba(86, 180, 249, 0.1);
      --radius: 12px;
      --radius-sm: 8px;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
      background: var(--bg-primary);
      color: var(--text-primary);
      line-height: 1.6;
      min-height: 100vh;
    }

    .header {
      background: linear-gradient(135deg, #1a1a2e 0%, #16213e 50%, #0f3460 100%);
      border-bottom: 1px solid var(--border);
      padding: 32px 40px;
    }
    .header-content { max-width: 1400px; margin: 0 auto; }
    .header h1 { font-size: 26px; font-weight: 700; margin-bottom: 6px; }
    .header-meta {
      display: flex;
      gap: 20px;
      flex-wrap: wrap;
      color: var(--text-secondary);
      font-size: 13px;
    }
    .overall-badge {
      display: inline-block;
      margin-left: 12px;
      padding: 2px 12px;
      border-radius: 20px;
      font-size: 13px;
      font-weight: 600;
      text-transform: uppercase;
      vertical-align: middle;
    }
    .overall-passed { background: var(--green-bg); color: var(--green); }
    .overall-failed { background: var(--red-bg); color: var(--red); }

    .container { max-width: 1400px; margin: 0 auto; padding: 28px 40px 60px; }

    .summary-grid {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(180px, 1fr));
      gap: 16px;
      margin-bottom: 28px;
    }
    .summary-card {
      background: var(--bg-card);
      border: 1px solid var(--border);
      border-radius: var(--radius);
      padding: 20px 24px;
      text-align: center;
    }
    .summary-value { font-size: 36px; font-weight: 700; line-height: 1.2; }
    .summary-label {
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 1px;
      color: var(--text-secondary);
      margin-top: 4px;
    }
    .card-total .summary-value { color: var(--accent-light); }
    .card-passed .summary-value, .card-rate .summary-value { color: var(--green); }
    .card-failed .summary-value { color: var(--red); }
    .card-skipped .summary-value { color: var(--yellow); }
    .card-duration .summary-value { color: var(--blue); font-size: 28px; }

    .chart-section { display: flex; gap: 24px; margin-bottom: 28px; flex-wrap: wrap; }
    .donut-card {
      background: var(--bg-card);
      border: 1px solid var(--border);
      border-radius: var(--radius);
      padding: 28px;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: center;
      min-width: 220px;
    }
    .donut-wrapper { position: relative; width: 160px; height: 160px; }
    .donut-wrapper svg { transform: rotate(-90deg); }
    .donut-center {
      position: absolute;
      top: 50%;
      left: 50%;
      transform: translate(-50%, -50%);
      text-align: center;
    }
    .donut-center .rate { font-size: 28px; font-weight: 700; color: var(--green); }
    .donut-center .rate-label { font-size: 11px; color: var(--text-secondary); text-transform: uppercase; }
    .donut-legend { display: flex; gap: 16px; margin-top: 16px; flex-wrap: wrap; }
    .legend-item { display: flex; align-items: center; gap: 6px; font-size: 12px; color: var(--text-secondary); }
    .legend-dot { width: 10px; height: 10px; border-radius: 50%; }

    .projects-row { display: flex; gap: 12px; flex-wrap: wrap; flex: 1; }
    .project-card {
      background: var(--bg-card);
      border: 1px solid var(--border);
      border-radius: var(--radius);
      padding: 20px 24px;
      cursor: pointer;
      text-align: center;
      flex: 1;
      min-width: 160px;
    }
    .project-card:hover, .project-card.active {
      border-color: var(--accent);
      background: var(--bg-hover);
    }
    .project-icon { font-size: 28px; margin-bottom: 6px; }
    .project-name { font-weight: 600; font-size: 14px; margin-bottom: 6px; }
    .project-stats { font-size: 12px; color: var(--text-secondary); }
    .mini-passed { color: var(--green); margin-right: 6px; }
    .mini-failed { color: var(--red); }

    .toolbar { display: flex; gap: 10px; margin-bottom: 16px; flex-wrap: wrap; align-items: center; }
    .filter-btn {
      background: var(--bg-card);
      border: 1px solid var(--border);
      color: var(--text-secondary);
      padding: 7px 16px;
      border-radius: 20px;
      font-size: 13px;
      cursor: pointer;
    }
    .filter-btn:hover { border-color: var(--accent); color: var(--text-primary); }
    .filter-btn.active { background: var(--accent); color: #fff; border-color: var(--accent); }
    .search-input {
      background: var(--bg-card);
      border: 1px solid var(--border);
      color: var(--text-primary);
      padding: 7px 16px;
      border-radius: 20px;
      font-size: 13px;
      flex: 1;
      min-width: 200px;
      outline: none;
    }
    .search-input:focus { border-color: var(--accent); }
    .visible-count { font-size: 12px; color: var(--text-muted); }

    .table-wrapper {
      background: var(--bg-card);
      border: 1px solid var(--border);
      border-radius: var(--radius);
      overflow: hidden;
    }
    table { width: 100%; border-collapse: collapse; }
    thead th {
      background: var(--bg-secondary);
      padding: 12px 16px;
      text-align: left;
      font-size: 11px;
      text-transform: uppercase;
      letter-spacing: 1px;
      color: var(--text-muted);
      border-bottom: 1px solid var(--border);
      position: sticky;
      top: 0;
    }
    tbody tr { border-bottom: 1px solid var(--border); }
    tbody tr:last-child { border-bottom: none; }
    tbody tr:hover { background: var(--bg-hover); }
    td { padding: 14px 16px; font-size: 14px; vertical-align: top; }
    .cell-index { width: 40px; color: var(--text-muted); font-size: 12px; }
    .cell-status { width: 110px; }
    .cell-project { width: 140px; }
    .cell-duration { width: 90px; text-align: right; color: var(--text-secondary); }
    .cell-retry { width: 60px; text-align: center; }

    .badge {
      display: inline-block;
      padding: 3px 10px;
      border-radius: 6px;
      font-size: 11px;
      font-weight: 700;
      letter-spacing: 0.5px;
      background: var(--bg-secondary);
      color: var(--text-secondary);
    }
    .badge-passed { background: var(--green-bg); color: var(--green); }
    .badge-failed, .badge-interrupted { background: var(--red-bg); color: var(--red); }
    .badge-skipped { background: var(--yellow-bg); color: var(--yellow); }
    .badge-timedOut { background: var(--blue-bg); color: var(--blue); }
    .project-badge, .annotation {
      display: inline-block;
      background: var(--bg-secondary);
      border: 1px solid var(--border);
      padding: 2px 10px;
      border-radius: 6px;
      font-size: 12px;
    }
    .annotations { margin-top: 6px; display: flex; gap: 6px; flex-wrap: wrap; }
    .retry-badge {
      background: var(--yellow-bg);
      color: var(--yellow);
      padding: 2px 8px;
      border-radius: 6px;
      font-size: 11px;
      font-weight: 600;
    }

    .test-title { font-weight: 600; margin-bottom: 2px; }
    .test-meta { font-size: 12px; color: var(--text-muted); }
    .flaky-tag { color: var(--yellow); font-size: 11px; margin-left: 6px; }

    .error-block { margin-top: 10px; }
    .error-message {
      background: var(--red-bg);
      border: 1px solid rgba(244, 85, 108, 0.2);
      border-radius: var(--radius-sm);
      padding: 12px 14px;
      font-size: 12px;
      color: var(--red);
      overflow-x: auto;
      white-space: pre-wrap;
      word-break: break-word;
      font-family: "SF Mono", "Fira Code", monospace;
    }

    .steps-block { margin-top: 10px; }
    .steps-toggle { font-size: 12px; color: var(--accent-light); cursor: pointer; user-select: none; }
    .toggle-icon { display: inline-block; font-size: 10px; }
    .steps-block.open .toggle-icon { transform: rotate(90deg); }
    .steps-list {
      display: none;
      margin-top: 8px;
      padding-left: 12px;
      border-left: 2px solid var(--border);
    }
    .steps-block.open .steps-list { display: block; }
    .step-item { display: flex; gap: 8px; align-items: center; padding: 3px 0; font-size: 12px; color: var(--text-secondary); }
    .step-item.step-error { color: var(--red); }
    .step-category {
      background: var(--bg-secondary);
      padding: 1px 6px;
      border-radius: 4px;
      font-size: 10px;
      color: var(--text-muted);
      text-transform: uppercase;
    }
    .step-title { flex: 1; }
    .step-duration { color: var(--text-muted); }

    .empty-state { text-align: center; padding: 60px 20px; color: var(--text-muted); }
    .empty-state .icon { font-size: 48px; margin-bottom: 12px; }

    .footer { text-align: center; padding: 20px; color: var(--text-muted); font-size: 12px; }

    @media (max-width: 768px) {
      .header { padding: 20px; }
      .container { padding: 16px; }
      .summary-grid { grid-template-columns: repeat(3, 1fr); }
      .cell-project, .cell-retry { display: none; }
    }
"""

SCRIPT = """
    var currentStatus = 'all';
    var currentProject = 'all';
    var currentSearch = '';

    function outcomeBucket(status) {
      return ['passed', 'skipped', 'timedOut'].indexOf(status) >= 0 ? status : 'failed';
    }

    function applyFilters() {
      var query = currentSearch.toLowerCase();
      var rows = document.querySelectorAll('.test-row');
      var shown = 0;
      rows.forEach(function (row) {
        var matchStatus = currentStatus === 'all' || outcomeBucket(row.dataset.status) === currentStatus;
        var matchProject = currentProject === 'all' || row.dataset.project === currentProject;
        var matchSearch = !query || row.textContent.toLowerCase().indexOf(query) >= 0;
        var visible = matchStatus && matchProject && matchSearch;
        row.style.display = visible ? '' : 'none';
        if (visible) { shown += 1; }
      });
      var counter = document.getElementById('visibleCount');
      if (counter) { counter.textContent = shown + ' of ' + rows.length + ' shown'; }
    }

    function filterByStatus(status, button) {
      currentStatus = status;
      document.querySelectorAll('.filter-btn').forEach(function (b) { b.classList.remove('active'); });
      if (button) { button.classList.add('active'); }
      applyFilters();
    }

    function filterByProject(project, card) {
      currentProject = currentProject === project ? 'all' : project;
      document.querySelectorAll('.project-card').forEach(function (c) { c.classList.remove('active'); });
      if (currentProject !== 'all' && card) { card.classList.add('active'); }
      applyFilters();
    }

    function searchTests(query) {
      currentSearch = query || '';
      applyFilters();
    }
"""
