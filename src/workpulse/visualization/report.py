"""Generate a self-contained HTML report with two bar+line charts.

The report embeds all data as a JSON blob inside a ``<script>`` tag and
draws the charts as pure SVG (zero external dependencies) so it can be
opened from any local file:// path or served statically.
"""

import json
from typing import Any, Dict

from ..models import Report
from ..serialization import headline_metrics
from .charts import build_filesystem_chart, build_git_chart

# The page shows the manifest this many rows at a time; every row is embedded
MANIFEST_PAGE_SIZE = 500


def build_report_data(report: Report) -> Dict[str, Any]:
    """Collect everything the page script renders into one JSON-safe dict."""
    activity = report.git_activity
    effort = report.effort_estimate
    snap = report.filesystem_snapshot

    summary = {
        "label": report.date_range.label,
        "start": report.date_range.start.isoformat(sep=" "),
        "end": report.date_range.end.isoformat(sep=" "),
        "generated_at": report.generated_at.isoformat(sep=" ", timespec="seconds"),
        "target_root": report.target_root,
        "tool_version": report.tool_version,
        "git_available": activity.available,
        "git_unavailable_reason": activity.unavailable_reason,
        "repo_root": activity.repo_root,
        "scope": "all branches" if activity.all_branches else (activity.ref or "HEAD"),
    }
    summary.update(headline_metrics(report))
    summary.update(
        {
            "partitioned_added": activity.partitioned_added,
            "partitioned_removed": activity.partitioned_removed,
            "estimated_hours": effort.hours,
            "floor_applied": bool(effort.breakdown.get("floor_applied")),
        }
    )

    filesystem = None
    manifest = []
    if snap is not None:
        filesystem = {
            "root": snap.root,
            "total_items": snap.total_items,
            "total_files": snap.total_files,
            "total_folders": snap.total_folders,
            "total_shortcuts": snap.total_shortcuts,
            "total_reparse_points": snap.total_reparse_points,
            "sum_lines": snap.sum_lines,
            "sum_chars": snap.sum_chars,
            "sum_size_bytes": snap.sum_size_bytes,
            "top_extensions": [[ext, count] for ext, count in snap.top_extensions],
            "filters_applied": list(snap.filters_applied),
            "unreadable_dirs": snap.unreadable_dirs,
        }
        recent = sorted(snap.files, key=lambda f: f.last_modified, reverse=True)
        manifest = [
            {
                "path": f.relative_path,
                "size": f.size_bytes,
                "lines": f.line_count,
                "chars": f.char_count,
                "modified": f.last_modified.isoformat(sep=" ", timespec="seconds"),
                "binary": f.is_binary,
            }
            for f in recent
        ]

    return {
        "summary": summary,
        "filesystem": filesystem,
        "manifest": manifest,
        "manifest_page_size": MANIFEST_PAGE_SIZE,
        "charts": {
            "git": build_git_chart(report).to_dict(),
            "filesystem": build_filesystem_chart(report).to_dict(),
        },
        "commits": [
            {
                "hash": c.short_hash,
                "time": c.timestamp_local.isoformat(sep=" ", timespec="minutes"),
                "author": c.author,
                "subject": c.subject,
            }
            for c in report.recent_commits
        ],
        "alternative": {
            alt.view: {
                "basis": alt.basis,
                "rows": [
                    {
                        "label": row.label,
                        "factor": row.factor,
                        "hours": row.estimated_hours,
                        "links": row.reference_links,
                        "description_html": row.description_html,
                    }
                    for row in alt.rows
                ],
            }
            for alt in report.alternative_effort
        },
        "baseline": (
            {
                "path": report.baseline_delta.baseline_path,
                "generated_at": report.baseline_delta.baseline_generated_at,
                "deltas": report.baseline_delta.deltas,
            }
            if report.baseline_delta is not None
            else None
        ),
        "warnings": list(report.warnings),
    }


def embed_json(data: Dict[str, Any]) -> str:
    """JSON safe to place inside a ``<script>`` element."""
    text = json.dumps(data, ensure_ascii=False)
    return (
        text.replace("<", "\\u003c")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def generate_html(report: Report) -> str:
    """Render ``report`` as one standalone HTML document."""
    return _build_html(embed_json(build_report_data(report)))


# ── Private helpers ──────────────────────────────────────────────────


def _build_html(data_json: str) -> str:
    """Build self-contained HTML with embedded chart code.

    The f-string uses {{ / }} to produce literal braces in the CSS and JS.
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Workspace Activity Report</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #0d1117; color: #c9d1d9; }}
#header {{ padding: 24px 32px; border-bottom: 1px solid #21262d; }}
#header h1 {{ font-size: 24px; color: #58a6ff; margin-bottom: 8px; }}
#meta {{ font-size: 13px; color: #8b949e; }}
#controls {{ padding: 16px 32px; display: flex; gap: 8px; }}
.view-btn {{ background: #161b22; color: #c9d1d9; border: 1px solid #30363d; padding: 6px 14px; border-radius: 6px; font-size: 14px; cursor: pointer; }}
.view-btn.active {{ background: #1f6feb; border-color: #1f6feb; color: #fff; }}
.tiles {{ display: flex; gap: 16px; padding: 0 32px 16px; flex-wrap: wrap; }}
.stat {{ background: #161b22; padding: 8px 16px; border-radius: 6px; border: 1px solid #21262d; min-width: 120px; }}
.stat-value {{ font-size: 20px; font-weight: 600; color: #c9d1d9; }}
.stat-label {{ font-size: 12px; text-transform: uppercase; letter-spacing: 0.5px; color: #8b949e; }}
.stat-delta {{ font-size: 12px; color: #8b949e; }}
section {{ padding: 16px 32px; }}
section h2 {{ font-size: 18px; color: #58a6ff; margin-bottom: 12px; }}
.chart {{ width: 100%; height: 280px; background: #161b22; border-radius: 8px; border: 1px solid #21262d; }}
.chart text {{ fill: #8b949e; font-size: 11px; }}
.legend {{ font-size: 12px; color: #8b949e; margin-top: 6px; }}
.legend .bar-key {{ color: #3fb950; }}
.legend .trend-key {{ color: #d29922; }}
table {{ width: 100%; border-collapse: collapse; font-size: 13px; }}
th, td {{ text-align: left; padding: 6px 8px; border-bottom: 1px solid #21262d; vertical-align: top; }}
th {{ color: #8b949e; font-weight: 500; }}
td.num {{ text-align: right; font-variant-numeric: tabular-nums; }}
code {{ color: #58a6ff; }}
details summary {{ cursor: pointer; }}
details .desc {{ color: #8b949e; margin-top: 4px; }}
a {{ color: #58a6ff; }}
.note {{ font-size: 13px; color: #8b949e; margin-top: 8px; }}
.warning {{ color: #d29922; font-size: 13px; }}
.hidden {{ display: none; }}
footer {{ padding: 24px 32px; text-align: center; color: #484f58; font-size: 12px; border-top: 1px solid #21262d; margin-top: 32px; }}
</style>
</head>
<body>
<div id="header">
  <h1>Workspace Activity Report</h1>
  <div id="meta"></div>
</div>
<div id="controls">
  <button class="view-btn active" data-view="git">Version-control view</button>
  <button class="view-btn" data-view="filesystem">Filesystem view</button>
</div>
<div class="view" data-view="git">
  <div class="tiles" id="git-tiles"></div>
  <section><h2>Activity per day</h2><div class="chart" id="git-chart"></div><div class="legend" id="git-legend"></div></section>
  <section><h2>Commits</h2><div id="commits"></div></section>
  <section><h2>Effort cross-reference</h2><div id="git-effort"></div></section>
</div>
<div class="view hidden" data-view="filesystem">
  <div class="tiles" id="fs-tiles"></div>
  <section><h2>Files modified per day</h2><div class="chart" id="fs-chart"></div><div class="legend" id="fs-legend"></div></section>
  <section><h2>Files</h2><div id="manifest"></div></section>
  <section><h2>Effort cross-reference</h2><div id="fs-effort"></div></section>
</div>
<section id="warnings" class="hidden"><h2>Warnings</h2><ul id="warning-list"></ul></section>
<footer>Generated by workpulse</footer>

<script>
// All report data embedded at generation time.
const DATA = {data_json};

// ── Utility ──────────────────────────────────────────────────────
function escapeHtml(str) {{
  var div = document.createElement("div");
  div.appendChild(document.createTextNode(str == null ? "" : String(str)));
  return div.innerHTML;
}}

function fmt(n) {{
  if (n == null) return "\\u2013";
  return Number(n).toLocaleString();
}}

function safeHref(url) {{
  return /^https?:\\/\\//i.test(url) ? url : "#";
}}

function tiles(elId, pairs) {{
  document.getElementById(elId).innerHTML = pairs.map(function(p) {{
    var delta = p[2] == null ? "" : '<div class="stat-delta">' + (p[2] > 0 ? "+" : "") + fmt(p[2]) + ' vs baseline</div>';
    return '<div class="stat"><div class="stat-value">' + escapeHtml(p[1]) + '</div><div class="stat-label">' + escapeHtml(p[0]) + '</div>' + delta + '</div>';
  }}).join("");
}}

function delta(name) {{
  return DATA.baseline ? DATA.baseline.deltas[name] : null;
}}

// ── Header and tiles ─────────────────────────────────────────────
(function() {{
  var s = DATA.summary;
  var meta = escapeHtml(s.label) + " &middot; " + escapeHtml(s.start) + " to " + escapeHtml(s.end) +
    " &middot; <code>" + escapeHtml(s.target_root) + "</code>";
  if (s.repo_root) meta += " &middot; " + escapeHtml(s.scope);
  document.getElementById("meta").innerHTML = meta;

  tiles("git-tiles", [
    ["Commits", fmt(s.commit_count), delta("commit_count")],
    ["Files changed", fmt(s.files_changed), delta("files_changed")],
    ["Lines added", fmt(s.raw_lines_added), delta("raw_lines_added")],
    ["Lines removed", fmt(s.raw_lines_removed), delta("raw_lines_removed")],
    ["Lines modified", fmt(s.partitioned_modified), delta("partitioned_modified")],
    ["Estimated hours", s.estimated_hours.toFixed(2), delta("estimated_minutes") == null ? null : delta("estimated_minutes") / 60],
  ]);

  var fs = DATA.filesystem;
  if (fs) {{
    tiles("fs-tiles", [
      ["Files", fmt(fs.total_files)],
      ["Folders", fmt(fs.total_folders)],
      ["Lines", fmt(fs.sum_lines)],
      ["Characters", fmt(fs.sum_chars)],
      ["Bytes", fmt(fs.sum_size_bytes)],
      ["Links", fmt(fs.total_reparse_points)],
    ]);
  }}
}})();

// ── Bar + line chart (pure SVG, zero deps) ───────────────────────
function renderChart(elId, legendId, chart) {{
  var container = document.getElementById(elId);
  var W = container.clientWidth || 800;
  var H = container.clientHeight || 280;
  var NS = "http://www.w3.org/2000/svg";
  var svg = document.createElementNS(NS, "svg");
  svg.setAttribute("width", W);
  svg.setAttribute("height", H);
  container.innerHTML = "";
  container.appendChild(svg);

  document.getElementById(legendId).innerHTML =
    '<span class="bar-key">&#9632; ' + escapeHtml(chart.bar_label) + '</span> &nbsp; ' +
    '<span class="trend-key">&#9472; ' + escapeHtml(chart.trend_label) + '</span>';

  if (chart.empty) {{
    var t = document.createElementNS(NS, "text");
    t.setAttribute("x", W / 2);
    t.setAttribute("y", H / 2);
    t.setAttribute("text-anchor", "middle");
    t.textContent = chart.empty_label;
    svg.appendChild(t);
    return;
  }}

  var pad = {{ left: 40, right: 40, top: 16, bottom: 32 }};
  var iw = W - pad.left - pad.right, ih = H - pad.top - pad.bottom;
  var n = chart.labels.length;
  var maxBar = Math.max.apply(null, chart.bars.concat([1]));
  var maxTrend = Math.max.apply(null, chart.trend.concat([1]));
  var slot = iw / n;
  var bw = Math.max(1, slot * 0.7);

  var points = [];
  for (var i = 0; i < n; i++) {{
    var bh = chart.bars[i] / maxBar * ih;
    var x = pad.left + i * slot + (slot - bw) / 2;
    var rect = document.createElementNS(NS, "rect");
    rect.setAttribute("x", x);
    rect.setAttribute("y", pad.top + ih - bh);
    rect.setAttribute("width", bw);
    rect.setAttribute("height", bh);
    rect.setAttribute("fill", "#3fb950");
    var title = document.createElementNS(NS, "title");
    title.textContent = chart.labels[i] + ": " + chart.bars[i] + " / " + chart.trend[i];
    rect.appendChild(title);
    svg.appendChild(rect);
    points.push((pad.left + i * slot + slot / 2) + "," + (pad.top + ih - chart.trend[i] / maxTrend * ih));

    // Label roughly every eighth day so long ranges stay readable
    if (n <= 8 || i % Math.ceil(n / 8) === 0) {{
      var lbl = document.createElementNS(NS, "text");
      lbl.setAttribute("x", pad.left + i * slot + slot / 2);
      lbl.setAttribute("y", H - 10);
      lbl.setAttribute("text-anchor", "middle");
      lbl.textContent = chart.labels[i].substring(5);
      svg.appendChild(lbl);
    }}
  }}

  var line = document.createElementNS(NS, "polyline");
  line.setAttribute("points", points.join(" "));
  line.setAttribute("fill", "none");
  line.setAttribute("stroke", "#d29922");
  line.setAttribute("stroke-width", "2");
  svg.appendChild(line);

  [[pad.left - 6, "end", maxBar], [W - pad.right + 6, "start", maxTrend]].forEach(function(a) {{
    var t = document.createElementNS(NS, "text");
    t.setAttribute("x", a[0]);
    t.setAttribute("y", pad.top + 10);
    t.setAttribute("text-anchor", a[1]);
    t.textContent = fmt(Math.round(a[2]));
    svg.appendChild(t);
  }});
}}

// ── Tables ───────────────────────────────────────────────────────
(function() {{
  var el = document.getElementById("commits");
  var s = DATA.summary;
  var notes = "";
  if (!s.git_available) notes += '<p class="warning">Version-control history unavailable: ' + escapeHtml(s.git_unavailable_reason || "unknown reason") + '</p>';
  if (s.floor_applied) notes += '<p class="note">The 30 minute minimum for a period with commits was applied.</p>';
  if (!DATA.commits.length) {{
    el.innerHTML = notes + '<p class="note">No commits in this range.</p>';
    return;
  }}
  var more = s.commit_count > DATA.commits.length ? '<p class="note">Showing the latest ' + DATA.commits.length + ' of ' + fmt(s.commit_count) + ' commits.</p>' : "";
  el.innerHTML = notes + '<table><tr><th>Commit</th><th>Time</th><th>Author</th><th>Subject</th></tr>' +
    DATA.commits.map(function(c) {{
      return '<tr><td><code>' + escapeHtml(c.hash) + '</code></td><td>' + escapeHtml(c.time) + '</td><td>' + escapeHtml(c.author) + '</td><td>' + escapeHtml(c.subject) + '</td></tr>';
    }}).join("") + '</table>' + more;
}})();

(function() {{
  var el = document.getElementById("manifest");
  if (!DATA.filesystem) {{
    el.innerHTML = '<p class="note">No filesystem inventory.</p>';
    return;
  }}
  if (!DATA.manifest.length) {{
    el.innerHTML = '<p class="note">No files.</p>';
    return;
  }}
  var fs = DATA.filesystem;
  var note = fs.filters_applied.length ? '<p class="note">Excluded: ' + fs.filters_applied.map(escapeHtml).join(", ") + '</p>' : "";
  var size = DATA.manifest_page_size;
  var pages = Math.ceil(DATA.manifest.length / size);
  var page = 0;

  function render() {{
    var rows = DATA.manifest.slice(page * size, (page + 1) * size);
    var pager = "";
    if (pages > 1) {{
      pager = '<p class="note"><button class="view-btn" data-page="-1"' + (page === 0 ? ' disabled' : '') + '>Newer</button> ' +
        'Files ' + fmt(page * size + 1) + '-' + fmt(page * size + rows.length) + ' of ' + fmt(DATA.manifest.length) +
        ' <button class="view-btn" data-page="1"' + (page === pages - 1 ? ' disabled' : '') + '>Older</button></p>';
    }}
    el.innerHTML = pager + '<table><tr><th>Path</th><th>Modified</th><th>Bytes</th><th>Lines</th><th>Chars</th></tr>' +
      rows.map(function(f) {{
        return '<tr><td>' + escapeHtml(f.path) + (f.binary ? ' <span class="note">(binary)</span>' : '') + '</td><td>' + escapeHtml(f.modified) +
          '</td><td class="num">' + fmt(f.size) + '</td><td class="num">' + fmt(f.lines) + '</td><td class="num">' + fmt(f.chars) + '</td></tr>';
      }}).join("") + '</table>' + note;
    el.querySelectorAll("button[data-page]").forEach(function(btn) {{
      btn.addEventListener("click", function() {{
        page = Math.min(pages - 1, Math.max(0, page + Number(btn.getAttribute("data-page"))));
        render();
      }});
    }});
  }}
  render();
}})();

function renderEffort(elId, view) {{
  var el = document.getElementById(elId);
  var alt = DATA.alternative[view];
  if (!alt || !alt.rows.length) {{
    el.innerHTML = '<p class="note">No catalog entries.</p>';
    return;
  }}
  el.innerHTML = '<p class="note">Lines basis: ' + fmt(alt.basis) + '</p><table><tr><th>Methodology</th><th>Hours per line</th><th>Estimated hours</th></tr>' +
    alt.rows.map(function(r) {{
      var links = r.links.map(function(u) {{
        return '<a href="' + escapeHtml(safeHref(u)) + '" rel="noreferrer">' + escapeHtml(u) + '</a>';
      }}).join("<br>");
      // description_html is escaped server side
      return '<tr><td><details><summary>' + escapeHtml(r.label) + '</summary><div class="desc">' + r.description_html +
        (links ? '<br>' + links : '') + '</div></details></td><td class="num">' + r.factor + '</td><td class="num">' + r.hours.toFixed(1) + '</td></tr>';
    }}).join("") + '</table>';
}}

(function() {{
  if (!DATA.warnings.length) return;
  document.getElementById("warnings").classList.remove("hidden");
  document.getElementById("warning-list").innerHTML = DATA.warnings.map(function(w) {{
    return '<li class="warning">' + escapeHtml(w) + '</li>';
  }}).join("");
}})();

// ── View toggle ──────────────────────────────────────────────────
function showView(name) {{
  document.querySelectorAll(".view").forEach(function(v) {{
    v.classList.toggle("hidden", v.getAttribute("data-view") !== name);
  }});
  document.querySelectorAll(".view-btn").forEach(function(b) {{
    b.classList.toggle("active", b.getAttribute("data-view") === name);
  }});
  if (name === "git") renderChart("git-chart", "git-legend", DATA.charts.git);
  else renderChart("fs-chart", "fs-legend", DATA.charts.filesystem);
}}
document.querySelectorAll(".view-btn").forEach(function(b) {{
  b.addEventListener("click", function() {{ showView(b.getAttribute("data-view")); }});
}});

// Initial render.
renderEffort("git-effort", "git");
renderEffort("fs-effort", "filesystem");
showView("git");
</script>
</body>
</html>
"""
