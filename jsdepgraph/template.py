"""HTML page rendering the force-layout graph with D3."""

GRAPH_DATA_PLACEHOLDER = "__GRAPH_DATA__"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Dependency Graph</title>
<style>
  body { margin: 0; font-family: sans-serif; background: #fafafa; }
  #legend { position: absolute; top: 10px; left: 10px; font-size: 12px;
            background: #fff; border: 1px solid #ddd; padding: 6px 10px; }
  .link.import { stroke: #333; }
  .link.call { stroke: #1f77b4; stroke-dasharray: 4 3; }
  .node text { font-size: 11px; pointer-events: none; }
</style>
<script src="https://d3js.org/d3.v7.min.js"></script>
</head>
<body>
<div id="legend">
  <div>&#9472; import</div>
  <div style="color:#1f77b4">&#9476; call</div>
</div>
<svg id="graph"></svg>
<script>
const graph = __GRAPH_DATA__;
const width = window.innerWidth;
const height = window.innerHeight;
const ids = new Set(graph.nodes.map(d => d.id));
const links = graph.links.filter(l => ids.has(l.source) && ids.has(l.target));

const svg = d3.select("#graph").attr("width", width).attr("height", height);
const root = svg.append("g");
svg.call(d3.zoom().on("zoom", event => root.attr("transform", event.transform)));

svg.append("defs").append("marker")
    .attr("id", "arrow").attr("viewBox", "0 -5 10 10")
    .attr("refX", 18).attr("markerWidth", 6).attr("markerHeight", 6)
    .attr("orient", "auto")
  .append("path").attr("d", "M0,-5L10,0L0,5").attr("fill", "#999");

const simulation = d3.forceSimulation(graph.nodes)
    .force("link", d3.forceLink(links).id(d => d.id).distance(90))
    .force("charge", d3.forceManyBody().strength(-250))
    .force("center", d3.forceCenter(width / 2, height / 2));

const link = root.append("g").selectAll("line").data(links).join("line")
    .attr("class", d => "link " + d.type)
    .attr("stroke-width", d => d.value)
    .attr("marker-end", "url(#arrow)");

const color = d3.scaleOrdinal([1, 2], ["#4e79a7", "#bab0ab"]);
const node = root.append("g").selectAll("g").data(graph.nodes).join("g")
    .attr("class", "node")
    .call(d3.drag()
      .on("start", (event, d) => {
        if (!event.active) simulation.alphaTarget(0.3).restart();
        d.fx = d.x; d.fy = d.y;
      })
      .on("drag", (event, d) => { d.fx = event.x; d.fy = event.y; })
      .on("end", (event, d) => {
        if (!event.active) simulation.alphaTarget(0);
        d.fx = null; d.fy = null;
      }));

node.append("circle").attr("r", 8).attr("fill", d => color(d.group));
node.append("text").attr("x", 11).attr("y", 4).text(d => d.label);
node.append("title").text(d => d.id);

simulation.on("tick", () => {
  link.attr("x1", d => d.source.x).attr("y1", d => d.source.y)
      .attr("x2", d => d.target.x).attr("y2", d => d.target.y);
  node.attr("transform", d => `translate(${d.x},${d.y})`);
});
</script>
</body>
</html>
"""
